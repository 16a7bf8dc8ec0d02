"""Second-order low-pass filter standing in for the console's DA converter."""

from __future__ import annotations

import math
from typing import Optional, Tuple, Union

from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import I4, flush

_Coefficients = Tuple[float, float, float, float, float]


class DAConverter:
    """Biquad low-pass filter; coefficients are computed lazily per sample rate."""

    def __init__(self, freq: float, q: float) -> None:
        self._freq = freq
        self._q = q
        self._inputs = (0.0, 0.0)
        self._outputs = (0.0, 0.0)
        self._coefficients: Optional[_Coefficients] = None

    def _calculate_coefficients(self, sample_rate: float) -> _Coefficients:
        w = flush((2.0 * math.pi * self._freq) / sample_rate)
        sw = flush(math.sin(w))
        cw = flush(math.cos(w))
        alpha = sw / (2.0 * self._q)

        b0 = (1.0 - cw) / 2.0
        b1 = 1.0 - cw
        b2 = (1.0 - cw) / 2.0
        a0 = 1.0 + alpha
        a1 = -2.0 * cw
        a2 = 1.0 - alpha
        return (b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)

    def process(self, sample_rate: float, sample: Union[I4, float]) -> float:
        """Filter one sample and return the output."""
        if self._coefficients is None:
            self._coefficients = self._calculate_coefficients(sample_rate)
        b0, b1, b2, a1, a2 = self._coefficients

        value = float(sample)
        in0, in1 = self._inputs
        out0, out1 = self._outputs

        output = flush(b0 * value + b1 * in0 + b2 * in1 - a1 * out0 - a2 * out1)

        self._inputs = (value, in0)
        self._outputs = (output, out0)
        return output

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        if param is SoyBoyParameter.DAC_FREQ:
            self._freq = value
            self._coefficients = None
        elif param is SoyBoyParameter.DAC_Q:
            self._q = value
            self._coefficients = None

    def get_param(self, param: SoyBoyParameter) -> float:
        if param is SoyBoyParameter.DAC_FREQ:
            return self._freq
        if param is SoyBoyParameter.DAC_Q:
            return self._q
        return 0.0