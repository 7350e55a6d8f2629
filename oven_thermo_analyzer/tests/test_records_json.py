import json
from datetime import datetime

import pytest

from oven_thermo_analyzer.ingest.errors import FormatError
from oven_thermo_analyzer.ingest.records_json import (
    reading_from_json,
    record_to_dict,
    records_from_json,
    records_to_json,
)
from oven_thermo_analyzer.ingest.readers_gbd import decode
from oven_thermo_analyzer.models.frames import Record
from oven_thermo_analyzer.models.results import ChannelReading
from oven_thermo_analyzer.tests.gbd_samples import build_gbd


@pytest.mark.parametrize(
    "raw, expected",
    [
        (25.0, ChannelReading.numeric(25.0)),
        (-3, ChannelReading.numeric(-3.0)),
        ("31.5", ChannelReading.numeric(31.5)),
        ("BURNOUT", ChannelReading.burnout()),
        ("N/A", ChannelReading.unavailable()),
        ("burnout", ChannelReading.unavailable()),
        (None, ChannelReading.unavailable()),
        (True, ChannelReading.unavailable()),
        ("nan", ChannelReading.unavailable()),
        ([1], ChannelReading.unavailable()),
    ],
)
def test_reading_classification(raw, expected) -> None:
    assert reading_from_json(raw) == expected


def test_persisted_layout() -> None:
    rec = Record(
        timestamp=datetime(2024, 1, 1, 8, 0, 0, 500_000),
        temperatures=(ChannelReading.numeric(25.0), ChannelReading.burnout(), ChannelReading.unavailable()),
        alarm1=3,
        alarm_out=-1,
    )
    assert record_to_dict(rec) == {
        "timestamp": "2024-01-01 08:00:00.5",
        "temperatures": [25.0, "BURNOUT", "N/A"],
        "alarm1": 3,
        "alarmOut": -1,
    }


def test_decoded_records_survive_storage() -> None:
    _, records = decode(build_gbd([[250, -10], [251, 0]], alarms=[(1, 0), (0, 2)]))
    back = records_from_json(records_to_json(records))
    assert back == list(records)


def test_missing_optional_fields() -> None:
    [rec] = records_from_json(json.dumps([{"timestamp": "2024-01-01 08:00:00"}]))
    assert rec.temperatures == ()
    assert (rec.alarm1, rec.alarm_out) == (0, 0)
    assert rec.timestamp_text == "2024-01-01 08:00:00.0"


def test_empty_text_is_no_records() -> None:
    assert records_from_json("") == []


@pytest.mark.parametrize(
    "text, field",
    [
        ("{not json", "data"),
        ('{"timestamp": "2024-01-01 08:00:00.0"}', "data"),
        ('[{"temperatures": [1]}]', "timestamp"),
        ('[{"timestamp": "yesterday"}]', "timestamp"),
    ],
)
def test_invalid_data(text, field) -> None:
    with pytest.raises(FormatError) as ei:
        records_from_json(text)
    assert ei.value.field == field
