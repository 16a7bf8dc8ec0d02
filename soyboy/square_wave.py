"""Pulse oscillator with the console's four duty ratios."""

from __future__ import annotations

import math
from enum import IntEnum

from soyboy.event import Event, PitchBend
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import I4, AudioProcessor, pulse

_U32_MAX = 2**32 - 1


def _as_index(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    return int(min(value, _U32_MAX))


class SquareWaveDuty(IntEnum):
    RATIO_12_5 = 0
    RATIO_25 = 1
    RATIO_50 = 2
    RATIO_75 = 3

    def ratio(self) -> float:
        """Fraction of the period spent low."""
        return _RATIOS[self]


_RATIOS = {
    SquareWaveDuty.RATIO_12_5: 0.125,
    SquareWaveDuty.RATIO_25: 0.25,
    SquareWaveDuty.RATIO_50: 0.5,
    SquareWaveDuty.RATIO_75: 0.75,
}


class SquareWaveOscillator(AudioProcessor[I4]):
    def __init__(self) -> None:
        self.freq = 0.0
        self.duty = SquareWaveDuty.RATIO_50
        self._phase = 0.0
        self._pitch = 0.0

    def process(self, sample_rate: float) -> I4:
        if self.freq == 0.0:
            signal = I4.ZERO
        else:
            signal = pulse(self._phase, self.duty.ratio())
        self._phase += (self.freq * self._pitch) / sample_rate
        return signal

    def set_freq(self, freq: float) -> None:
        self.freq = freq

    def trigger(self, event: Event) -> None:
        if isinstance(event, PitchBend):
            self._pitch = event.ratio

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        if param is SoyBoyParameter.OSC_SQ_DUTY:
            try:
                self.duty = SquareWaveDuty(_as_index(value))
            except ValueError:
                pass

    def get_param(self, param: SoyBoyParameter) -> float:
        if param is SoyBoyParameter.OSC_SQ_DUTY:
            return float(self.duty)
        return 0.0