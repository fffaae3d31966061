"""Label/orbit declutter engine: per-frame visibility decisions for every body.

Pure function of (bodies, state): no render-API objects, no module state.
The caller applies the returned maps to its own label and orbit-line nodes.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from skydeclutter.models import (
    Body,
    BodyKind,
    DeclutterResult,
    DeclutterState,
    Vec3,
)
from skydeclutter.occlusion import Sphere, is_occluded
from skydeclutter.vec3 import distance

LOG = logging.getLogger(__name__)

_OCCLUDER_KINDS = frozenset({BodyKind.PLANET, BodyKind.DWARF, BodyKind.SUN})
_MAJOR_KINDS = frozenset({BodyKind.PLANET, BodyKind.DWARF})


@dataclass(frozen=True)
class Overview:
    """Home camera, nothing focused."""


@dataclass(frozen=True)
class FocusBody:
    """A planet or dwarf planet (or the sun) is focused."""

    selected: Body


@dataclass(frozen=True)
class FocusMoon:
    """A moon is focused; its anchor is the parent it orbits, if that resolves."""

    selected: Body
    anchor: Body | None


@dataclass(frozen=True)
class Unfocused:
    """Not in overview, yet nothing resolvable is selected."""


ViewMode = Overview | FocusBody | FocusMoon | Unfocused


def resolve_view_mode(bodies_by_id: Mapping[str, Body], state: DeclutterState) -> ViewMode:
    """Classify the frame's camera/selection state into one explicit mode.

    Args:
        bodies_by_id: Snapshot lookup.
        state: Frame state.

    Returns:
        Overview, FocusBody, FocusMoon or Unfocused.
    """
    if state.is_overview:
        return Overview()

    selected = bodies_by_id.get(state.selected_id) if state.selected_id else None
    if selected is None:
        if state.selected_id:
            LOG.debug("selected id %r not in snapshot, treating as unfocused", state.selected_id)
        return Unfocused()

    if selected.kind != BodyKind.MOON:
        return FocusBody(selected=selected)

    # An explicit selected_parent_id wins even when it does not resolve.
    anchor_id = state.selected_parent_id or selected.parent_id
    anchor = bodies_by_id.get(anchor_id) if anchor_id else None
    if anchor is None:
        LOG.debug("no anchor parent for selected moon %r (parent %r)", selected.id, anchor_id)
    return FocusMoon(selected=selected, anchor=anchor)


def _overview_label(body: Body, bodies_by_id: Mapping[str, Body], state: DeclutterState) -> bool:
    if body.kind != BodyKind.MOON:
        return True
    parent = bodies_by_id.get(body.parent_id) if body.parent_id else None
    if parent is None:
        LOG.debug("moon %r has unresolved parent %r", body.id, body.parent_id)
        return False
    d = distance(state.camera_pos, parent.position)
    return d <= state.thresholds.moon_reveal_distance_to_parent


def _focus_body_label(body: Body, mode: FocusBody, state: DeclutterState) -> bool:
    selected = mode.selected
    d = distance(state.camera_pos, selected.position)
    if body.kind == BodyKind.MOON:
        return body.parent_id == selected.id and d <= state.thresholds.moon_focus_label_distance
    if body.kind in _MAJOR_KINDS:
        # Close up: keep the framing clean. Far away: others give context.
        return d > state.thresholds.focus_hide_others_distance
    # The sun is left alone here; FocusMoon keeps it explicitly.
    return True


def _focus_moon_label(body: Body, mode: FocusMoon, state: DeclutterState) -> bool:
    anchor = mode.anchor
    if body.kind == BodyKind.MOON:
        if anchor is None or body.parent_id != anchor.id:
            return False
        d = distance(state.camera_pos, anchor.position)
        return d <= state.thresholds.moon_focus_label_distance

    reference: Vec3 = anchor.position if anchor is not None else mode.selected.position
    d = distance(state.camera_pos, reference)
    if d > state.thresholds.focus_hide_others_distance:
        return True
    # Close up: only the anchor and the sun (orientation) survive.
    return (anchor is not None and body.id == anchor.id) or body.kind == BodyKind.SUN


def _label_rule(
    body: Body, mode: ViewMode, bodies_by_id: Mapping[str, Body], state: DeclutterState
) -> bool:
    if isinstance(mode, Overview):
        return _overview_label(body, bodies_by_id, state)
    if isinstance(mode, FocusBody):
        return _focus_body_label(body, mode, state)
    if isinstance(mode, FocusMoon):
        return _focus_moon_label(body, mode, state)
    return True


def _orbit_rule(body: Body, mode: ViewMode) -> bool:
    if isinstance(mode, FocusBody):
        return body.kind == BodyKind.MOON and body.parent_id == mode.selected.id
    if isinstance(mode, FocusMoon):
        return (
            body.kind == BodyKind.MOON
            and mode.anchor is not None
            and body.parent_id == mode.anchor.id
        )
    # Overview and Unfocused: dozens of moon orbits are clutter.
    return body.kind != BodyKind.MOON


def build_occluders(bodies: Sequence[Body]) -> tuple[Sphere, ...]:
    """Occluder spheres for a snapshot: planets, dwarfs and the sun.

    Moons are too small to matter. The selected body stays in the set so a
    focused planet still hides the moons behind it.
    """
    return tuple(
        Sphere(center=b.position, radius=b.radius, id=b.id)
        for b in bodies
        if b.kind in _OCCLUDER_KINDS
    )


def compute_declutter_visibility(
    bodies: Sequence[Body], state: DeclutterState
) -> DeclutterResult:
    """Compute label and orbit visibility for every body this frame.

    Args:
        bodies: Read-only snapshot of all bodies. Ids should be unique; on
            duplicates the later record wins.
        state: Selection, camera and tuning for this frame.

    Returns:
        DeclutterResult with an entry for every body in both maps.
    """
    bodies_by_id: dict[str, Body] = {b.id: b for b in bodies}
    mode = resolve_view_mode(bodies_by_id, state)
    occluders = build_occluders(bodies)
    occlusion = state.occlusion

    label_visible_by_id: dict[str, bool] = {}
    orbit_visible_by_id: dict[str, bool] = {}

    for body in bodies:
        label_visible = _label_rule(body, mode, bodies_by_id, state)

        # The selected body's own marker never carries a redundant label.
        if state.selected_id is not None and body.id == state.selected_id:
            label_visible = False

        if label_visible and occlusion.enabled:
            label_visible = not is_occluded(
                state.camera_pos,
                body.position,
                occluders,
                radius_multiplier=occlusion.radius_multiplier,
            )

        label_visible_by_id[body.id] = label_visible
        orbit_visible_by_id[body.id] = _orbit_rule(body, mode)

    return DeclutterResult(
        label_visible_by_id=label_visible_by_id,
        orbit_visible_by_id=orbit_visible_by_id,
    )
