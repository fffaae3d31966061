from __future__ import annotations

import pytest

from skydeclutter import demo
from skydeclutter.config import ConfigError
from skydeclutter.models import Vec3


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SKYDECLUTTER_MOON_REVEAL_DISTANCE",
        "SKYDECLUTTER_MOON_FOCUS_LABEL_DISTANCE",
        "SKYDECLUTTER_FOCUS_HIDE_OTHERS_DISTANCE",
        "SKYDECLUTTER_OCCLUSION",
        "SKYDECLUTTER_OCCLUSION_RADIUS_MULTIPLIER",
    ):
        monkeypatch.delenv(name, raising=False)


def test_focused_demo_prints_one_line_per_body(capsys: pytest.CaptureFixture[str]) -> None:
    result = demo.main()

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(demo.SAMPLE_BODIES)
    assert lines[3].startswith("mars ")
    assert "label=off" in lines[3]
    assert result.label_visible_by_id["phobos"] is True
    assert result.label_visible_by_id["deimos"] is True
    assert result.label_visible_by_id["io"] is False
    assert result.label_visible_by_id["jupiter"] is False
    assert {k for k, v in result.orbit_visible_by_id.items() if v} == {"phobos", "deimos"}


def test_overview_demo(capsys: pytest.CaptureFixture[str]) -> None:
    result = demo.main(selected_id=None, camera_pos=Vec3(0.0, 50_000.0, 0.0))

    capsys.readouterr()
    for body_id in ("sun", "earth", "mars", "jupiter"):
        assert result.label_visible_by_id[body_id] is True
        assert result.orbit_visible_by_id[body_id] is True
    for moon_id in ("moon", "phobos", "deimos", "io"):
        assert result.label_visible_by_id[moon_id] is False
        assert result.orbit_visible_by_id[moon_id] is False


def test_missing_camera_falls_back_to_module_camera(capsys: pytest.CaptureFixture[str]) -> None:
    explicit = demo.main(camera_pos=demo.camera)
    fallback = demo.main(camera_pos=None)

    capsys.readouterr()
    assert fallback == explicit


def test_demo_raises_on_bad_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SKYDECLUTTER_OCCLUSION", "sometimes")

    with pytest.raises(ConfigError):
        demo.main()
