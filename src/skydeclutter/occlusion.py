"""Ray-segment vs. sphere occlusion, used to emulate a depth test for overlay labels.

Screen-space labels are drawn on top of the scene, so the renderer never hides
them behind a planet. These helpers answer the question the depth buffer
would have: does any sphere sit between the camera and the label's anchor?
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from skydeclutter.models import Vec3
from skydeclutter.vec3 import dot, length_sq, sub

DEFAULT_RADIUS_MULTIPLIER = 1.05
_DEGENERATE_SEGMENT_SQ = 1e-12


@dataclass(frozen=True)
class Sphere:
    """A candidate occluder."""

    center: Vec3
    radius: float
    id: str | None = None


def is_occluded(
    ray_origin: Vec3,
    target: Vec3,
    spheres: Iterable[Sphere],
    ignore_ids: set[str] | frozenset[str] | None = None,
    radius_multiplier: float = DEFAULT_RADIUS_MULTIPLIER,
) -> bool:
    """Return True if any sphere blocks the segment ray_origin → target.

    The segment ends at the target, so spheres at or behind it never count.
    This also keeps a body from hiding its own label: its center projects to
    t == 1.

    Args:
        ray_origin: Segment start (usually the camera position).
        target: Segment end (the label's anchor point).
        spheres: Candidate occluders.
        ignore_ids: Sphere ids to skip.
        radius_multiplier: Scale applied to every sphere radius.

    Returns:
        True on the first sphere that intersects the open segment.
    """
    ignore = ignore_ids or frozenset()
    direction = sub(target, ray_origin)
    seg_len_sq = length_sq(direction)
    if seg_len_sq <= _DEGENERATE_SEGMENT_SQ:
        return False

    for sphere in spheres:
        if sphere.id is not None and sphere.id in ignore:
            continue

        r = sphere.radius * radius_multiplier
        t = dot(sub(sphere.center, ray_origin), direction) / seg_len_sq
        if t <= 0 or t >= 1:
            continue

        dx = ray_origin.x + direction.x * t - sphere.center.x
        dy = ray_origin.y + direction.y * t - sphere.center.y
        dz = ray_origin.z + direction.z * t - sphere.center.z
        if dx * dx + dy * dy + dz * dz <= r * r:
            return True

    return False


def _as_array(points: Sequence[Vec3]) -> np.ndarray:
    if not points:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array([(p.x, p.y, p.z) for p in points], dtype=np.float64)


def occluded_mask(
    ray_origin: Vec3,
    targets: Sequence[Vec3],
    spheres: Sequence[Sphere],
    ignore_ids: set[str] | frozenset[str] | None = None,
    radius_multiplier: float = DEFAULT_RADIUS_MULTIPLIER,
) -> np.ndarray:
    """Vectorized is_occluded for many targets sharing one origin.

    Arithmetic follows is_occluded term by term, so both agree on
    boundary cases.

    Returns:
        Boolean array of shape (len(targets),).
    """
    ignore = ignore_ids or frozenset()
    kept = [s for s in spheres if s.id is None or s.id not in ignore]

    tgt = _as_array(targets)
    centers = _as_array([s.center for s in kept])
    r = np.array([s.radius for s in kept], dtype=np.float64) * radius_multiplier

    ox, oy, oz = ray_origin.x, ray_origin.y, ray_origin.z
    # (N, 1) segment directions against (1, M) sphere offsets
    dx = (tgt[:, 0] - ox)[:, None]
    dy = (tgt[:, 1] - oy)[:, None]
    dz = (tgt[:, 2] - oz)[:, None]
    cx = centers[:, 0][None, :]
    cy = centers[:, 1][None, :]
    cz = centers[:, 2][None, :]

    seg_len_sq = dx * dx + dy * dy + dz * dz
    valid = seg_len_sq > _DEGENERATE_SEGMENT_SQ

    with np.errstate(divide="ignore", invalid="ignore"):
        t = ((cx - ox) * dx + (cy - oy) * dy + (cz - oz) * dz) / seg_len_sq
        ex = ox + dx * t - cx
        ey = oy + dy * t - cy
        ez = oz + dz * t - cz
        dist_sq = ex * ex + ey * ey + ez * ez

    hit = (t > 0) & (t < 1) & (dist_sq <= (r * r)[None, :])
    return (hit & valid).any(axis=1)
