"""Data model definitions: the boundary between the caller's scene and the decision engine."""

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True)
class Vec3:
    """World-space point or direction. No render-API types cross this boundary."""

    x: float
    y: float
    z: float


class BodyKind(StrEnum):
    PLANET = "planet"
    DWARF = "dwarf"
    MOON = "moon"
    SUN = "sun"


@dataclass(frozen=True)
class Body:
    """One astronomical object as seen this frame. Rebuilt by the caller every frame."""

    id: str  # Stable slug ("mars", "phobos")
    kind: BodyKind
    position: Vec3  # Current world position (already time-advanced)
    radius: float  # World units, only used for occlusion spheres
    parent_id: str | None = None  # Moons only: id of the body it orbits


@dataclass(frozen=True)
class Thresholds:
    """Camera distance thresholds (world units). Unset fields keep their defaults."""

    moon_reveal_distance_to_parent: float = 18_000  # Overview: moon labels near their parent
    moon_focus_label_distance: float = 22_000  # Focus: moon labels near the anchor
    focus_hide_others_distance: float = 14_000  # Focus: hide other major bodies when closer


@dataclass(frozen=True)
class OcclusionSettings:
    enabled: bool = True
    radius_multiplier: float = 1.05  # Inflates occluders so labels vanish a touch early


@dataclass(frozen=True)
class DeclutterState:
    """Selection and camera state for a single frame."""

    is_overview: bool  # True in the home/default camera with nothing focused
    camera_pos: Vec3
    selected_id: str | None = None
    selected_parent_id: str | None = None  # Parent of the selected moon, if known
    thresholds: Thresholds = field(default_factory=Thresholds)
    occlusion: OcclusionSettings = field(default_factory=OcclusionSettings)


@dataclass(frozen=True)
class DeclutterResult:
    """The sole output of the engine. Built fresh on every call."""

    label_visible_by_id: dict[str, bool]
    orbit_visible_by_id: dict[str, bool]


@dataclass(frozen=True)
class SceneVisibilityState:
    """User-facing visibility switches from the scene menu."""

    markers_visible: bool = True
    orbits_visible: bool = True
    declutter_auto: bool = True  # Apply the engine's rules on top of the switches
