import pytest

from soyboy.event import (
    NoteOff,
    NoteOn,
    PitchBend,
    ResetWaveTableAsSine,
    ResetWaveTableAtRandom,
    SetWaveTable,
    SweepReset,
    event_from_id,
)
from soyboy.utils import I4


@pytest.mark.parametrize(
    "event_id, expected",
    [
        (0, NoteOn(note=0, velocity=0.0)),
        (1, NoteOff(note=0)),
        (2, PitchBend(ratio=0.0)),
        (3, SweepReset(freq=0.0)),
        (4, SetWaveTable(idx=0, value=I4.from_signed(0))),
        (5, ResetWaveTableAsSine()),
        (6, ResetWaveTableAtRandom()),
    ],
)
def test_event_from_id(event_id, expected):
    assert event_from_id(event_id) == expected


@pytest.mark.parametrize("event_id", [7, 100, -1])
def test_event_from_unknown_id(event_id):
    with pytest.raises(ValueError):
        event_from_id(event_id)


def test_events_are_distinct_kinds():
    kinds = {type(event_from_id(i)) for i in range(7)}
    assert len(kinds) == 7


def test_set_wave_table_default_value_is_zero():
    assert SetWaveTable(idx=3).value == I4.ZERO


def test_events_are_immutable():
    event = NoteOn(note=60, velocity=1.0)
    with pytest.raises(AttributeError):
        event.note = 61
    assert event.note == 60