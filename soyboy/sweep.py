"""Frequency sweep unit producing per-sample frequency offsets."""

from __future__ import annotations

import math
from enum import IntEnum

from soyboy.event import Event, SweepReset
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import AudioProcessor, flush

SWEEP_TIMER_FREQUENCY = 128.0
_U32_MAX = 2**32 - 1


def _as_index(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    return int(min(value, _U32_MAX))


class SweepType(IntEnum):
    NONE = 0
    UP = 1
    DOWN = 2
    TRIANGLE = 3


class SweepOscillator(AudioProcessor[float]):
    """Returns how much the voice frequency should change at each sample."""

    def __init__(self) -> None:
        self._shadow_freq = 0.0
        self._timer_sec = 0.0
        self._clipped = False
        self._sweep_type = SweepType.NONE
        self._amount = 0.0
        self._period = 0.0

    @property
    def clipped(self) -> bool:
        """True once the swept frequency has left the audible range."""
        return self._clipped

    def _check_frequency_clip(self) -> None:
        if self._shadow_freq < 10.0 or self._shadow_freq > 10000.0:
            self._clipped = True

    def _step(self, delta: float) -> float:
        self._timer_sec = 0.0
        self._shadow_freq += delta
        self._check_frequency_clip()
        return delta

    def process(self, sample_rate: float) -> float:
        if self._amount == 0.0 or self._period == 0.0:
            return 0.0

        self._timer_sec += 1.0 / sample_rate
        interval = self._period / SWEEP_TIMER_FREQUENCY
        delta = flush(self._shadow_freq * math.pow(2.0, self._amount - 8.1))

        if self._sweep_type is SweepType.UP:
            return self._step(delta) if self._timer_sec > interval else 0.0
        if self._sweep_type is SweepType.DOWN:
            return self._step(-delta) if self._timer_sec > interval else 0.0
        if self._sweep_type is SweepType.TRIANGLE:
            quarter = self._period * 1.0 / SWEEP_TIMER_FREQUENCY
            delta = flush(math.pow(2.0, self._amount - 8.1) / self._period)
            self._check_frequency_clip()
            if self._timer_sec < quarter:
                return delta
            if self._timer_sec < quarter * 3.0:
                return -delta
            if self._timer_sec >= quarter * 4.0:
                self._timer_sec = 0.0
            return delta
        return 0.0

    def set_freq(self, freq: float) -> None:
        """The sweep follows its own shadow frequency instead."""

    def trigger(self, event: Event) -> None:
        if isinstance(event, SweepReset):
            self._shadow_freq = event.freq
            self._timer_sec = 0.0
            self._clipped = False

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        if param is SoyBoyParameter.SWEEP_TYPE:
            try:
                sweep_type = SweepType(_as_index(value))
            except ValueError:
                return
            self._clipped = False
            self._timer_sec = 0.0
            self._sweep_type = sweep_type
        elif param is SoyBoyParameter.SWEEP_AMOUNT:
            self._amount = value
        elif param is SoyBoyParameter.SWEEP_PERIOD:
            self._period = value

    def get_param(self, param: SoyBoyParameter) -> float:
        if param is SoyBoyParameter.SWEEP_TYPE:
            return float(self._sweep_type)
        if param is SoyBoyParameter.SWEEP_AMOUNT:
            return self._amount
        if param is SoyBoyParameter.SWEEP_PERIOD:
            return self._period
        return 0.0