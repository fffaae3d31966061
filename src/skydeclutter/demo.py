"""CLI entry point printing declutter decisions for a sample snapshot.

Edit the selected/camera variables at the top, then run:
    uv run python src/skydeclutter/demo.py
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

from skydeclutter.config import load_occlusion, load_thresholds  # noqa: E402
from skydeclutter.declutter import compute_declutter_visibility  # noqa: E402
from skydeclutter.models import (  # noqa: E402
    Body,
    BodyKind,
    DeclutterResult,
    DeclutterState,
    Vec3,
)

selected = "mars"
camera = Vec3(22_900.0, 0.0, 40.0)

SAMPLE_BODIES: tuple[Body, ...] = (
    Body("sun", BodyKind.SUN, Vec3(0.0, 0.0, 0.0), 700.0),
    Body("earth", BodyKind.PLANET, Vec3(15_000.0, 0.0, 0.0), 64.0),
    Body("moon", BodyKind.MOON, Vec3(15_380.0, 0.0, 0.0), 17.0, parent_id="earth"),
    Body("mars", BodyKind.PLANET, Vec3(22_800.0, 0.0, 0.0), 34.0),
    Body("phobos", BodyKind.MOON, Vec3(22_809.0, 0.0, 0.0), 1.0, parent_id="mars"),
    Body("deimos", BodyKind.MOON, Vec3(22_823.0, 0.0, 0.0), 1.0, parent_id="mars"),
    Body("jupiter", BodyKind.PLANET, Vec3(77_800.0, 0.0, 0.0), 700.0),
    Body("io", BodyKind.MOON, Vec3(78_220.0, 0.0, 0.0), 18.0, parent_id="jupiter"),
)


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def main(selected_id: str | None = selected, camera_pos: Vec3 | None = None) -> DeclutterResult:
    """Run the engine once over SAMPLE_BODIES and print one line per body.

    Args:
        selected_id: Focused body, or None for the overview camera.
        camera_pos: Camera world position. Defaults to the module-level camera.

    Returns:
        The computed DeclutterResult.
    """
    state = DeclutterState(
        is_overview=selected_id is None,
        camera_pos=camera if camera_pos is None else camera_pos,
        selected_id=selected_id,
        thresholds=load_thresholds(),
        occlusion=load_occlusion(),
    )
    result = compute_declutter_visibility(SAMPLE_BODIES, state)
    for body in SAMPLE_BODIES:
        print(
            f"{body.id:<8} label={_on_off(result.label_visible_by_id[body.id])}"
            f"  orbit={_on_off(result.orbit_visible_by_id[body.id])}"
        )
    return result


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("SKYDECLUTTER_LOG_LEVEL", "WARNING"))
    main()
