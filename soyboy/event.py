"""Events that drive the synthesizer and its parts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from soyboy.utils import I4


@dataclass(frozen=True)
class NoteOn:
    note: int
    velocity: float


@dataclass(frozen=True)
class NoteOff:
    note: int


@dataclass(frozen=True)
class PitchBend:
    ratio: float


@dataclass(frozen=True)
class SweepReset:
    freq: float


@dataclass(frozen=True)
class SetWaveTable:
    idx: int
    value: I4 = field(default_factory=lambda: I4.ZERO)


@dataclass(frozen=True)
class ResetWaveTableAsSine:
    pass


@dataclass(frozen=True)
class ResetWaveTableAtRandom:
    pass


Event = Union[
    NoteOn,
    NoteOff,
    PitchBend,
    SweepReset,
    SetWaveTable,
    ResetWaveTableAsSine,
    ResetWaveTableAtRandom,
]

_DEFAULT_EVENTS = (
    lambda: NoteOn(note=0, velocity=0.0),
    lambda: NoteOff(note=0),
    lambda: PitchBend(ratio=0.0),
    lambda: SweepReset(freq=0.0),
    lambda: SetWaveTable(idx=0, value=I4.from_signed(0)),
    ResetWaveTableAsSine,
    ResetWaveTableAtRandom,
)


def event_from_id(value: int) -> Event:
    """Return the event kind numbered ``value`` with zeroed fields."""
    if not 0 <= value < len(_DEFAULT_EVENTS):
        raise ValueError(f"unknown event id: {value}")
    return _DEFAULT_EVENTS[value]()