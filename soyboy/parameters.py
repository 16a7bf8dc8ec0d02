"""Synthesizer parameters, their value ranges and their text forms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Tuple, Union

from soyboy.utils import (
    convergent_denormalize,
    convergent_normalize,
    divergent_denormalize,
    divergent_normalize,
    linear_denormalize,
    linear_normalize,
)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class SoyBoyParameter(IntEnum):
    """Every parameter the synthesizer exposes, numbered by its id."""

    MASTER_VOLUME = 0
    PITCH_BEND = 1
    DETUNE = 2
    OSCILLATOR_TYPE = 3
    NUM_VOICES = 4
    SWEEP_TYPE = 5
    SWEEP_AMOUNT = 6
    SWEEP_PERIOD = 7
    STUTTER_TIME = 8
    STUTTER_DEPTH = 9
    STUTTER_WHEN = 10
    EG_ATTACK = 11
    EG_DECAY = 12
    EG_SUSTAIN = 13
    EG_RELEASE = 14
    OSC_SQ_DUTY = 15
    OSC_NS_INTERVAL = 16
    DAC_FREQ = 17
    DAC_Q = 18


class ParameterType(Enum):
    NON_LINEAR = "non_linear"
    LINEAR = "linear"
    LIST = "list"
    INTEGER = "integer"


def _format_number(value: float, digits: int) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.{digits}f}"


def _parse_number(text: str) -> float:
    """Read the first space-separated word of ``text`` as a float."""
    word = text.split(" ")[0]
    if not word or not word.isascii() or word.strip() != word or "_" in word:
        raise ValueError(f"not a number: {text!r}")
    return float(word)


def _truncate_i64(value: float) -> float:
    if math.isnan(value):
        return 0.0
    if value >= _I64_MAX:
        return float(_I64_MAX)
    if value <= _I64_MIN:
        return float(_I64_MIN)
    return float(math.trunc(value))


def _clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


@dataclass(frozen=True)
class NonLinearParameter:
    """A curved mapping with dedicated values at the normalized ends 0 and 1."""

    plain_zero: float
    plain_min: float
    plain_max: float
    plain_one: float
    factor: float
    diverge: bool

    def denormalize(self, normalized: float) -> float:
        if normalized == 0.0:
            return self.plain_zero
        if normalized == 1.0:
            return self.plain_one
        mapping = divergent_denormalize if self.diverge else convergent_denormalize
        return mapping(normalized, self.plain_min, self.plain_max, self.factor)

    def normalize(self, plain: float) -> float:
        if plain == self.plain_zero:
            return 0.0
        if plain == self.plain_one:
            return 1.0
        mapping = divergent_normalize if self.diverge else convergent_normalize
        return mapping(plain, self.plain_min, self.plain_max, self.factor)

    def format(self, normalized: float) -> str:
        return _format_number(self.denormalize(normalized), 3)

    def parse(self, text: str) -> float:
        """Return the normalized value written in ``text``; raise ValueError if unreadable."""
        return self.normalize(_parse_number(text))


@dataclass(frozen=True)
class LinearParameter:
    min: float
    max: float

    def denormalize(self, normalized: float) -> float:
        return linear_denormalize(normalized, self.min, self.max)

    def normalize(self, plain: float) -> float:
        return linear_normalize(plain, self.min, self.max)

    def format(self, normalized: float) -> str:
        return _format_number(self.denormalize(normalized), 2)

    def parse(self, text: str) -> float:
        """Return the normalized value written in ``text``; raise ValueError if unreadable."""
        return self.normalize(_parse_number(text))


@dataclass(frozen=True)
class IntegerParameter:
    min: int
    max: int

    def denormalize(self, normalized: float) -> float:
        return _truncate_i64(linear_denormalize(normalized, float(self.min), float(self.max)))

    def normalize(self, plain: float) -> float:
        return linear_normalize(plain, float(self.min), float(self.max))

    def format(self, normalized: float) -> str:
        return _format_number(self.denormalize(normalized), 2)

    def parse(self, text: str) -> float:
        """Return the normalized value written in ``text``; raise ValueError if unreadable."""
        return self.normalize(_parse_number(text))


@dataclass(frozen=True)
class ListParameter:
    """A choice among named elements, indexed from 0."""

    elements: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.elements) < 2:
            raise ValueError("a list parameter needs at least two elements")

    @property
    def _last_index(self) -> int:
        return len(self.elements) - 1

    def denormalize(self, normalized: float) -> float:
        return normalized * self._last_index

    def normalize(self, plain: float) -> float:
        return plain / self._last_index

    def format(self, normalized: float) -> str:
        index = self.denormalize(normalized)
        if math.isnan(index) or index <= 0.0:
            return self.elements[0]
        if index >= len(self.elements):
            return ""
        return self.elements[int(index)]

    def parse(self, text: str) -> float:
        """Return the normalized value of the element named ``text``; raise ValueError if absent."""
        try:
            index = self.elements.index(text)
        except ValueError:
            raise ValueError(f"unknown element: {text!r}") from None
        return self.normalize(float(index))


ParameterInfo = Union[NonLinearParameter, LinearParameter, ListParameter, IntegerParameter]

_TYPES = {
    NonLinearParameter: ParameterType.NON_LINEAR,
    LinearParameter: ParameterType.LINEAR,
    ListParameter: ParameterType.LIST,
    IntegerParameter: ParameterType.INTEGER,
}


@dataclass(frozen=True)
class ParameterDef:
    """A parameter's value mapping together with how a host presents it."""

    parameter: ParameterInfo
    title: str
    short_title: str
    unit_name: str
    step_count: int
    default_value: float

    @property
    def parameter_type(self) -> ParameterType:
        return _TYPES[type(self.parameter)]

    def clamp(self, denorm: float) -> float:
        """Limit a plain value to the parameter's range."""
        info = self.parameter
        if isinstance(info, NonLinearParameter):
            if denorm in (info.plain_zero, info.plain_one):
                return denorm
            return _clamp(denorm, info.plain_min, info.plain_max)
        if isinstance(info, LinearParameter):
            return _clamp(denorm, info.min, info.max)
        if isinstance(info, ListParameter):
            return _clamp(denorm, 0.0, float(len(info.elements) - 1))
        return _clamp(denorm, float(info.min), float(info.max))

    def denormalize(self, normalized: float) -> float:
        return self.parameter.denormalize(normalized)

    def normalize(self, plain: float) -> float:
        return self.parameter.normalize(plain)

    def format(self, normalized: float) -> str:
        return f"{self.parameter.format(normalized)} {self.unit_name}"

    def parse(self, text: str) -> float:
        return self.parameter.parse(text)


ParameterMap = Dict[SoyBoyParameter, ParameterDef]


def _list_steps(info: ListParameter) -> int:
    return int(info.denormalize(1.0))


def make_global_parameters() -> ParameterMap:
    master_volume = NonLinearParameter(
        plain_zero=-math.inf,
        plain_min=-110.0,
        plain_max=6.0,
        plain_one=6.0,
        factor=10.0,
        diverge=False,
    )
    detune = IntegerParameter(min=-200, max=200)
    pitch = IntegerParameter(min=-4800, max=4800)
    oscillator = ListParameter(elements=("Square", "Noise", "Wavetable"))
    num_voices = IntegerParameter(min=1, max=8)
    sweep_type = ListParameter(elements=("None", "Up", "Down", "Tri"))
    sweep_amount = IntegerParameter(min=0, max=8)
    sweep_period = IntegerParameter(min=0, max=8)
    stutter_time = NonLinearParameter(
        plain_zero=0.001,
        plain_min=0.002,
        plain_max=1.0,
        plain_one=1.0,
        factor=2.0,
        diverge=True,
    )
    stutter_depth = LinearParameter(min=0.0, max=100.0)
    stutter_when = ListParameter(elements=("Note off", "Note on"))

    return {
        SoyBoyParameter.MASTER_VOLUME: ParameterDef(
            master_volume, "Master Volume", "Volume", "dB", 0, -4.0
        ),
        SoyBoyParameter.DETUNE: ParameterDef(
            detune, "Detune", "Detune", "cent", abs(detune.max) + abs(detune.min), 0.0
        ),
        SoyBoyParameter.PITCH_BEND: ParameterDef(
            pitch, "Pitch", "Pitch", "cent", abs(pitch.max) + abs(pitch.min), 0.0
        ),
        SoyBoyParameter.OSCILLATOR_TYPE: ParameterDef(
            oscillator, "Osc type", "Osc type", "", _list_steps(oscillator), 0.0
        ),
        SoyBoyParameter.NUM_VOICES: ParameterDef(
            num_voices,
            "Num of voices",
            "Voice num",
            "",
            num_voices.max - num_voices.min,
            3.0,
        ),
        SoyBoyParameter.SWEEP_TYPE: ParameterDef(
            sweep_type, "Sweep Type", "Sweep Type", "", _list_steps(sweep_type), 0.0
        ),
        SoyBoyParameter.SWEEP_AMOUNT: ParameterDef(
            sweep_amount,
            "Sweep Amount",
            "Sweep Amount",
            "",
            sweep_amount.max - sweep_amount.min,
            0.0,
        ),
        SoyBoyParameter.SWEEP_PERIOD: ParameterDef(
            sweep_period,
            "Sweep period",
            "Sweep period",
            "",
            sweep_period.max - sweep_period.min - 1,
            0.0,
        ),
        SoyBoyParameter.STUTTER_TIME: ParameterDef(
            stutter_time, "Stutter time", "Stutter time", "s", 0, 0.1
        ),
        SoyBoyParameter.STUTTER_DEPTH: ParameterDef(
            stutter_depth, "Stutter Depth", "Stutter Depth", "%", 0, 0.0
        ),
        SoyBoyParameter.STUTTER_WHEN: ParameterDef(
            stutter_when,
            "Stutter when",
            "Stutter when",
            "",
            _list_steps(stutter_when),
            1.0,
        ),
    }


def make_square_oscillator_parameters() -> ParameterMap:
    duty = ListParameter(elements=("12.5%", "25%", "50%", "75%"))
    return {
        SoyBoyParameter.OSC_SQ_DUTY: ParameterDef(
            duty, "OscSq: Duty", "Duty", "", _list_steps(duty), 2.0
        ),
    }


def make_noise_oscillator_parameters() -> ParameterMap:
    interval = NonLinearParameter(
        plain_zero=0.001,
        plain_min=0.002,
        plain_max=1.0,
        plain_one=1.0,
        factor=2.0,
        diverge=True,
    )
    return {
        SoyBoyParameter.OSC_NS_INTERVAL: ParameterDef(
            interval, "OscNs: Noise interval", "Noise int", "ms", 0, 0.05
        ),
    }


def make_wavetable_oscillator_parameters() -> ParameterMap:
    """The wavetable oscillator has no parameters of its own."""
    return {}


def make_envelope_generator_parameters() -> ParameterMap:
    eg_time = NonLinearParameter(
        plain_zero=0.0,
        plain_min=0.01,
        plain_max=2.0,
        plain_one=2.0,
        factor=1.4,
        diverge=True,
    )
    sustain = LinearParameter(min=0.0, max=1.0)
    return {
        SoyBoyParameter.EG_ATTACK: ParameterDef(eg_time, "Eg: Attack", "Attack", "s", 0, 0.08),
        SoyBoyParameter.EG_DECAY: ParameterDef(eg_time, "Eg: Decay", "Decay", "s", 0, 0.1),
        SoyBoyParameter.EG_RELEASE: ParameterDef(
            eg_time, "Eg: Release", "Release", "s", 0, 0.1
        ),
        SoyBoyParameter.EG_SUSTAIN: ParameterDef(
            sustain, "Eg: Sustain", "Sustain", "", 0, 0.3
        ),
    }


def make_dac_parameters() -> ParameterMap:
    freq = NonLinearParameter(
        plain_zero=40.0,
        plain_min=40.0,
        plain_max=22_000.0,
        plain_one=22_000.0,
        factor=1.9,
        diverge=True,
    )
    q = NonLinearParameter(
        plain_zero=0.5,
        plain_min=1.0,
        plain_max=40.0,
        plain_one=40.0,
        factor=2.0,
        diverge=True,
    )
    return {
        SoyBoyParameter.DAC_FREQ: ParameterDef(freq, "Dac: freq", "freq", "Hz", 0, 19_700.0),
        SoyBoyParameter.DAC_Q: ParameterDef(q, "Dac: Q", "Q", "", 0, 0.5),
    }


def make_parameter_info() -> ParameterMap:
    """Return the definition of every parameter."""
    params: ParameterMap = {}
    params.update(make_global_parameters())
    params.update(make_square_oscillator_parameters())
    params.update(make_noise_oscillator_parameters())
    params.update(make_wavetable_oscillator_parameters())
    params.update(make_envelope_generator_parameters())
    params.update(make_dac_parameters())
    return params