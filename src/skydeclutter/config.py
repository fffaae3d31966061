"""Environment configuration for thresholds and occlusion.

Entry points call ``load_dotenv()`` first; these loaders then read plain
environment variables. The engine itself never touches the environment.
"""

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import fields

from skydeclutter.models import OcclusionSettings, Thresholds

LOG = logging.getLogger(__name__)

_THRESHOLD_ENV: dict[str, str] = {
    "moon_reveal_distance_to_parent": "SKYDECLUTTER_MOON_REVEAL_DISTANCE",
    "moon_focus_label_distance": "SKYDECLUTTER_MOON_FOCUS_LABEL_DISTANCE",
    "focus_hide_others_distance": "SKYDECLUTTER_FOCUS_HIDE_OTHERS_DISTANCE",
}
OCCLUSION_ENV = "SKYDECLUTTER_OCCLUSION"
OCCLUSION_RADIUS_ENV = "SKYDECLUTTER_OCCLUSION_RADIUS_MULTIPLIER"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class ConfigError(Exception):
    """Malformed configuration value."""


def _raw(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_non_negative(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}: not a number: {raw!r}") from exc
    if not math.isfinite(value) or value < 0:
        raise ConfigError(f"{name}: must be a finite non-negative number, got {raw!r}")
    return value


def load_thresholds(environ: Mapping[str, str] | None = None) -> Thresholds:
    """Build Thresholds from the environment, keeping defaults for unset variables.

    Args:
        environ: Variable source. Defaults to os.environ.

    Raises:
        ConfigError: If a variable is set but not a finite non-negative number.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, float] = {}
    for f in fields(Thresholds):
        name = _THRESHOLD_ENV[f.name]
        raw = _raw(env, name)
        if raw is not None:
            overrides[f.name] = _parse_non_negative(name, raw)
    if overrides:
        LOG.info("threshold overrides from environment: %s", overrides)
    return Thresholds(**overrides)


def load_occlusion(environ: Mapping[str, str] | None = None) -> OcclusionSettings:
    """Build OcclusionSettings from the environment.

    Raises:
        ConfigError: On an unrecognised boolean or a bad radius multiplier.
    """
    env = os.environ if environ is None else environ
    defaults = OcclusionSettings()

    enabled = defaults.enabled
    raw_enabled = _raw(env, OCCLUSION_ENV)
    if raw_enabled is not None:
        lowered = raw_enabled.lower()
        if lowered in _TRUE:
            enabled = True
        elif lowered in _FALSE:
            enabled = False
        else:
            raise ConfigError(f"{OCCLUSION_ENV}: expected a boolean, got {raw_enabled!r}")

    radius_multiplier = defaults.radius_multiplier
    raw_radius = _raw(env, OCCLUSION_RADIUS_ENV)
    if raw_radius is not None:
        radius_multiplier = _parse_non_negative(OCCLUSION_RADIUS_ENV, raw_radius)

    return OcclusionSettings(enabled=enabled, radius_multiplier=radius_multiplier)
