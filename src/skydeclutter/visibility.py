"""Scene-level visibility switches layered over the declutter result."""

from collections.abc import Callable, Sequence
from dataclasses import replace

from skydeclutter.models import Body, DeclutterResult, SceneVisibilityState

Listener = Callable[[SceneVisibilityState], None]


def apply_scene_visibility(
    bodies: Sequence[Body],
    result: DeclutterResult,
    scene: SceneVisibilityState,
) -> DeclutterResult:
    """Combine the engine's decisions with the user's menu switches.

    With auto-declutter off the engine result is ignored and the switches
    alone decide. With it on, a switch can only hide what the engine shows.
    Bodies missing from ``result`` count as hidden.

    Args:
        bodies: Same snapshot that produced ``result``.
        result: Output of compute_declutter_visibility.
        scene: Current menu switches.

    Returns:
        A new DeclutterResult; ``result`` is left untouched.
    """
    if not scene.declutter_auto:
        return DeclutterResult(
            label_visible_by_id={b.id: scene.markers_visible for b in bodies},
            orbit_visible_by_id={b.id: scene.orbits_visible for b in bodies},
        )

    return DeclutterResult(
        label_visible_by_id={
            b.id: scene.markers_visible and result.label_visible_by_id.get(b.id, False)
            for b in bodies
        },
        orbit_visible_by_id={
            b.id: scene.orbits_visible and result.orbit_visible_by_id.get(b.id, False)
            for b in bodies
        },
    )


class SceneVisibilityStore:
    """Holds the menu switches and notifies subscribers on change."""

    def __init__(self, initial: SceneVisibilityState | None = None) -> None:
        self._state = initial or SceneVisibilityState()
        self._listeners: list[Listener] = []

    def get(self) -> SceneVisibilityState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and call it once with the current state.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: SceneVisibilityState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    def set_markers_visible(self, visible: bool) -> None:
        self._commit(replace(self._state, markers_visible=visible))

    def toggle_markers(self) -> None:
        self.set_markers_visible(not self._state.markers_visible)

    def set_orbits_visible(self, visible: bool) -> None:
        self._commit(replace(self._state, orbits_visible=visible))

    def toggle_orbits(self) -> None:
        self.set_orbits_visible(not self._state.orbits_visible)

    def set_declutter_auto(self, enabled: bool) -> None:
        self._commit(replace(self._state, declutter_auto=enabled))

    def toggle_declutter_auto(self) -> None:
        self.set_declutter_auto(not self._state.declutter_auto)
