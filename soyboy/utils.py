"""Numeric helpers, the 4-bit sample type and the audio processor interface."""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

T = TypeVar("T")

_U32_MAX = 2**32 - 1
NOTE_NUMBER_OF_440_HZ = 69


def flush(value: float) -> float:
    """Return ``value`` with NaN and subnormal numbers replaced by ``0.0``."""
    if math.isnan(value):
        return 0.0
    if value != 0.0 and abs(value) < sys.float_info.min:
        return 0.0
    return value


def _powf(base: float, exponent: float) -> float:
    """Float power that yields NaN or infinity instead of raising."""
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def _saturating_u32(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


class I4:
    """A 4-bit sample, stored unsigned in ``0..=15`` and read signed in ``-8..=7``."""

    __slots__ = ("_raw",)

    SIGNED_MIN: ClassVar[int] = -8
    SIGNED_MAX: ClassVar[int] = 7
    MAX: ClassVar[int] = 15
    ZERO: ClassVar["I4"]

    def __init__(self, value: int) -> None:
        self._raw = min(max(int(value), 0), self.MAX)

    @classmethod
    def from_signed(cls, value: int) -> "I4":
        """Build from a signed integer, saturating at the 4-bit limits."""
        clamped = min(max(int(value), cls.SIGNED_MIN), cls.SIGNED_MAX)
        return cls(clamped - cls.SIGNED_MIN)

    @classmethod
    def from_float(cls, value: float) -> "I4":
        """Quantise a value in ``[-1.0, 1.0]`` to a signed 4-bit sample."""
        value = flush(value)
        if math.isinf(value):
            return cls.from_signed(cls.SIGNED_MAX if value > 0 else cls.SIGNED_MIN)
        return cls.from_signed(math.floor(value * -cls.SIGNED_MIN))

    @property
    def raw(self) -> int:
        """The unsigned representation."""
        return self._raw

    def __int__(self) -> int:
        return self._raw + self.SIGNED_MIN

    def __float__(self) -> float:
        return int(self) / -self.SIGNED_MIN

    def __mul__(self, other: object) -> float:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return float(self) * other
        return NotImplemented

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, I4):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"I4.from_signed({int(self)})"


I4.ZERO = I4.from_signed(0)


class AudioProcessor(ABC, Generic[T]):
    """Something that produces one sample per call at a given sample rate."""

    @abstractmethod
    def process(self, sample_rate: float) -> T:
        """Produce the next sample."""

    @abstractmethod
    def set_freq(self, freq: float) -> None:
        """Set the frequency the processor runs at."""


def linear(x: float, slope: float) -> float:
    return flush(x * slope)


def discrete_loudness(x: float) -> float:
    """Map a continuous loudness to one of sixteen discrete steps."""
    return flush(_saturating_u32(x * 16.0) / 16.0)


def pulse(phase: float, duty: float) -> I4:
    ph = math.fmod(phase, 1.0)
    if ph < duty:
        return I4.from_signed(I4.SIGNED_MIN)
    return I4.from_signed(I4.SIGNED_MAX)


def frequency_from_note_number(note_num: int) -> float:
    """Equal-tempered frequency of a MIDI note, with note 69 at 440 Hz."""
    return 440.0 * _powf(2.0, (note_num - NOTE_NUMBER_OF_440_HZ) / 12.0)


def ratio_from_cents(cents: int) -> float:
    return _powf(2.0, cents / 1200.0)


def level(decibel: float) -> float:
    return flush(_powf(10.0, decibel / 10.0))


def linear_denormalize(v: float, min_value: float, max_value: float) -> float:
    span = abs(max_value - min_value)
    return flush(v * span + min_value)


def linear_normalize(x: float, min_value: float, max_value: float) -> float:
    span = abs(max_value - min_value)
    return flush((x - min_value) / span)


def divergent_denormalize(v: float, min_value: float, max_value: float, factor: float) -> float:
    span = abs(max_value) + abs(min_value)
    return flush(span * _powf(v, factor) + min_value)


def divergent_normalize(x: float, min_value: float, max_value: float, factor: float) -> float:
    span = abs(max_value) + abs(min_value)
    return flush(_powf((x - min_value) / span, 1.0 / factor))


def convergent_denormalize(v: float, min_value: float, max_value: float, factor: float) -> float:
    span = abs(max_value) + abs(min_value)
    return flush(span * _powf(v, 1.0 / factor) + min_value)


def convergent_normalize(x: float, min_value: float, max_value: float, factor: float) -> float:
    span = abs(max_value) + abs(min_value)
    return flush(_powf((x - min_value) / span, factor))