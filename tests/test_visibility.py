from __future__ import annotations

from skydeclutter.models import (
    Body,
    BodyKind,
    DeclutterResult,
    SceneVisibilityState,
    Vec3,
)
from skydeclutter.visibility import SceneVisibilityStore, apply_scene_visibility

BODIES = [
    Body("mars", BodyKind.PLANET, Vec3(0.0, 0.0, 0.0), 5.0),
    Body("phobos", BodyKind.MOON, Vec3(2.0, 0.0, 0.0), 1.0, parent_id="mars"),
]
RESULT = DeclutterResult(
    label_visible_by_id={"mars": False, "phobos": True},
    orbit_visible_by_id={"mars": False, "phobos": True},
)


def test_auto_declutter_off_uses_switches_only() -> None:
    scene = SceneVisibilityState(markers_visible=True, orbits_visible=False, declutter_auto=False)

    res = apply_scene_visibility(BODIES, RESULT, scene)

    assert res.label_visible_by_id == {"mars": True, "phobos": True}
    assert res.orbit_visible_by_id == {"mars": False, "phobos": False}


def test_auto_declutter_on_switches_can_only_hide() -> None:
    shown = apply_scene_visibility(BODIES, RESULT, SceneVisibilityState())
    no_markers = apply_scene_visibility(
        BODIES, RESULT, SceneVisibilityState(markers_visible=False)
    )

    assert shown == RESULT
    assert shown is not RESULT
    assert no_markers.label_visible_by_id == {"mars": False, "phobos": False}
    assert no_markers.orbit_visible_by_id == {"mars": False, "phobos": True}


def test_bodies_missing_from_result_are_hidden() -> None:
    extra = [*BODIES, Body("deimos", BodyKind.MOON, Vec3(3.0, 0.0, 0.0), 1.0, parent_id="mars")]

    res = apply_scene_visibility(extra, RESULT, SceneVisibilityState())

    assert res.label_visible_by_id["deimos"] is False
    assert res.orbit_visible_by_id["deimos"] is False


def test_store_notifies_subscribers_on_change_only() -> None:
    store = SceneVisibilityStore()
    seen: list[SceneVisibilityState] = []

    unsubscribe = store.subscribe(seen.append)
    store.set_markers_visible(True)  # no change
    store.toggle_markers()
    store.toggle_orbits()
    store.toggle_declutter_auto()
    unsubscribe()
    store.set_declutter_auto(True)

    assert seen == [
        SceneVisibilityState(),
        SceneVisibilityState(markers_visible=False),
        SceneVisibilityState(markers_visible=False, orbits_visible=False),
        SceneVisibilityState(markers_visible=False, orbits_visible=False, declutter_auto=False),
    ]
    assert store.get() == SceneVisibilityState(markers_visible=False, orbits_visible=False)


def test_stores_do_not_share_state() -> None:
    a = SceneVisibilityStore()
    b = SceneVisibilityStore(SceneVisibilityState(orbits_visible=False))

    a.set_orbits_visible(False)
    b.toggle_orbits()

    assert a.get().orbits_visible is False
    assert b.get().orbits_visible is True
