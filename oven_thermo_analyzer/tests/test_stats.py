from __future__ import annotations

import json

import pytest

from oven_thermo_analyzer.analysis.stats import (
    CanvasStats,
    all_canvas_stats,
    auto_color_scale,
    canvas_stats,
    clamp_offset,
    format_offset,
    format_temperature,
    max_offset_s,
    next_offset,
    parse_offset_text,
    record_count,
    refresh_stats,
    set_offset_from_text,
)
from oven_thermo_analyzer.models.catalog import Measurement, Thermoelement
from oven_thermo_analyzer.models.profile import ViewerSession


def _measurement(group: str, rows) -> Measurement:
    data = [
        {"timestamp": f"2024-01-01 08:00:0{2 * i}.0", "temperatures": row, "alarm1": 0, "alarmOut": 0}
        for i, row in enumerate(rows)
    ]
    return Measurement(filename="run.GBD", channel_group=group, data=json.dumps(data))


@pytest.fixture()
def session() -> ViewerSession:
    s = ViewerSession(sampling_interval_s=2.0)
    s.set_measurement("1-10", _measurement("1-10", [[20.0, 30.0, "BURNOUT"], [21.0, 35.0, 22.0], [22.0, 40.0, 23.0]]))
    s.thermoelements["MainTop"] = [
        Thermoelement(id=1, channel=1, relative_x=0.1, relative_y=0.1),
        Thermoelement(id=2, channel=2, relative_x=0.2, relative_y=0.2),
    ]
    s.thermoelements["ReinfTop"] = [Thermoelement(id=3, channel=3, relative_x=0.5, relative_y=0.5)]
    return s


def test_format_temperature() -> None:
    assert format_temperature(None) == "N/A"
    assert format_temperature(23.456) == "23.5°C"


def test_canvas_stats(session: ViewerSession) -> None:
    st = canvas_stats(session, "MainTop")
    assert st == CanvasStats(average=25.0, minimum=20.0, maximum=30.0)
    assert st.difference == 10.0
    assert st.display() == {
        "average": "25.0°C",
        "minimum": "20.0°C",
        "maximum": "30.0°C",
        "difference": "10.0°C",
    }


def test_empty_canvas_stats_are_na(session: ViewerSession) -> None:
    st = canvas_stats(session, "MainBottom")
    assert st == CanvasStats()
    assert st.difference is None
    assert set(st.display().values()) == {"N/A"}


def test_stats_skip_burnout_without_latching(session: ViewerSession) -> None:
    stats = all_canvas_stats(session)
    assert stats["ReinfTop"].average is None
    assert session.thermoelements["ReinfTop"][0].is_active
    assert all_canvas_stats(session, offset_s=2)["ReinfTop"].average == 22.0


def test_auto_color_scale(session: ViewerSession) -> None:
    assert auto_color_scale(all_canvas_stats(session, offset_s=4)) == (22.0, 40.0)
    assert auto_color_scale({"MainTop": CanvasStats()}) is None


def test_refresh_updates_scale_only_in_auto_mode(session: ViewerSession) -> None:
    refresh_stats(session)
    assert (session.color_scale_min, session.color_scale_max) == (20.0, 30.0)

    session.set_color_scale(0.0, 100.0)
    session.time_offset_s = 4
    refresh_stats(session)
    assert (session.color_scale_min, session.color_scale_max) == (0.0, 100.0)


def test_timeline_bounds(session: ViewerSession) -> None:
    assert record_count(session) == 3
    assert max_offset_s(session) == 4.0
    assert clamp_offset(session, -3) == 0.0
    assert clamp_offset(session, 100) == 4.0


def test_record_count_falls_back_to_second_group() -> None:
    s = ViewerSession()
    assert record_count(s) == 0
    assert max_offset_s(s) == 0.0
    s.set_measurement("11-20", _measurement("11-20", [[1.0], [2.0]]))
    assert record_count(s) == 2


def test_offset_text() -> None:
    assert parse_offset_text("02:05") == 125.0
    assert parse_offset_text(" 0:00 ") == 0.0
    assert parse_offset_text("1:75") is None
    assert parse_offset_text("abc") is None
    assert format_offset(125) == "02:05"
    assert format_offset(4.9) == "00:04"


def test_set_offset_from_text(session: ViewerSession) -> None:
    assert set_offset_from_text(session, "00:02")
    assert session.time_offset_s == 2.0
    assert set_offset_from_text(session, "10:00")
    assert session.time_offset_s == 4.0
    assert not set_offset_from_text(session, "later")
    assert session.time_offset_s == 4.0


def test_next_offset(session: ViewerSession) -> None:
    session.time_offset_s = 2.0
    assert next_offset(session) == 4.0
    session.time_offset_s = 4.0
    assert next_offset(session) is None
