"""Noise oscillator reading a table of random 4-bit samples."""

from __future__ import annotations

import random
from typing import Optional

from soyboy.event import Event
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import I4, AudioProcessor

TABLE_SIZE = 1024 * 8


class NoiseOscillator(AudioProcessor[I4]):
    """Steps through random samples, advancing once per interval."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        rng = rng if rng is not None else random.Random()
        self._interval_msec = 0.1
        self._sec_counter = 0.0
        self._table = tuple(I4.from_float(rng.random() * 2.0 - 1.0) for _ in range(TABLE_SIZE))
        self._index = 0

    def process(self, sample_rate: float) -> I4:
        if self._sec_counter >= self._interval_msec / 1000.0:
            self._index = (self._index + 1) % len(self._table)
            self._sec_counter = 0.0
        self._sec_counter += 1.0 / sample_rate
        return self._table[self._index]

    def set_freq(self, freq: float) -> None:
        """Noise does not depend on pitch."""

    def trigger(self, event: Event) -> None:
        """Noise does not react to events."""

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        if param is SoyBoyParameter.OSC_NS_INTERVAL:
            self._interval_msec = value

    def get_param(self, param: SoyBoyParameter) -> float:
        if param is SoyBoyParameter.OSC_NS_INTERVAL:
            return self._interval_msec
        return 0.0