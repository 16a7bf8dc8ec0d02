"""Oscillator that plays back a small table of 4-bit samples."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence, Tuple

from soyboy.event import (
    Event,
    PitchBend,
    ResetWaveTableAsSine,
    ResetWaveTableAtRandom,
    SetWaveTable,
)
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import I4, AudioProcessor, flush

WAVETABLE_SIZE = 32


def _table_index(phase: float) -> int:
    if math.isnan(phase) or phase <= 0.0:
        return 0
    return min(int(phase), WAVETABLE_SIZE - 1)


def _sine_table() -> list:
    table = []
    phase = 0.0
    for _ in range(WAVETABLE_SIZE):
        v = flush(math.sin(phase * 2.0 * math.pi))
        table.append(I4(max(int((v + 1.0) * abs(I4.SIGNED_MIN)), 0)))
        phase += 1.0 / WAVETABLE_SIZE
    return table


class WaveTableOscillator(AudioProcessor[I4]):
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.freq = 0.0
        self._phase = 0.0
        self._pitch = 0.0
        self._table = _sine_table()

    @property
    def table(self) -> Tuple[I4, ...]:
        """A copy of the current wave table."""
        return tuple(self._table)

    @table.setter
    def table(self, samples: Sequence[I4]) -> None:
        if len(samples) != WAVETABLE_SIZE:
            raise ValueError(f"a wave table holds exactly {WAVETABLE_SIZE} samples")
        self._table = list(samples)

    def reset_as_sine(self) -> None:
        """Fill the table with one period of a sine wave."""
        self._table = _sine_table()

    def randomize(self) -> None:
        """Fill the table with random samples."""
        self._table = [I4(int(self._rng.random() * I4.MAX)) for _ in range(WAVETABLE_SIZE)]

    def process(self, sample_rate: float) -> I4:
        value = self._table[_table_index(self._phase)]
        size = float(WAVETABLE_SIZE)
        phase = self._phase + ((self.freq * self._pitch) / sample_rate) * size
        self._phase = math.fmod(phase, size) if math.isfinite(phase) else math.nan
        return value

    def set_freq(self, freq: float) -> None:
        self.freq = freq

    def trigger(self, event: Event) -> None:
        if isinstance(event, PitchBend):
            self._pitch = event.ratio
        elif isinstance(event, SetWaveTable):
            if 0 <= event.idx < WAVETABLE_SIZE:
                self._table[event.idx] = event.value
        elif isinstance(event, ResetWaveTableAsSine):
            self.reset_as_sine()
        elif isinstance(event, ResetWaveTableAtRandom):
            self.randomize()

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        """The wave table oscillator has no parameters."""

    def get_param(self, param: SoyBoyParameter) -> float:
        return 0.0