"""One synthesizer voice: oscillators, sweep, envelope and DA converter."""

from __future__ import annotations

import math
import random
from enum import IntEnum
from typing import Optional, Sequence, Tuple

from soyboy.dac import DAConverter
from soyboy.envelope_generator import EnvelopeGenerator
from soyboy.event import (
    Event,
    NoteOff,
    NoteOn,
    PitchBend,
    ResetWaveTableAsSine,
    ResetWaveTableAtRandom,
    SetWaveTable,
    SweepReset,
)
from soyboy.noise import NoiseOscillator
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.square_wave import SquareWaveOscillator
from soyboy.sweep import SweepOscillator
from soyboy.utils import (
    I4,
    AudioProcessor,
    frequency_from_note_number,
    ratio_from_cents,
)
from soyboy.wave_table import WaveTableOscillator

_U32_MAX = 2**32 - 1
_I16_MIN = -(2**15)
_I16_MAX = 2**15 - 1


def _as_index(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    return int(min(value, _U32_MAX))


def _as_i16(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(max(value, _I16_MIN), _I16_MAX))


class OscillatorType(IntEnum):
    SQUARE = 0
    NOISE = 1
    WAVE_TABLE = 2


_SWEEP_PARAMS = (SoyBoyParameter.SWEEP_AMOUNT, SoyBoyParameter.SWEEP_PERIOD)
_ENVELOPE_PARAMS = (
    SoyBoyParameter.STUTTER_TIME,
    SoyBoyParameter.STUTTER_DEPTH,
    SoyBoyParameter.STUTTER_WHEN,
    SoyBoyParameter.EG_ATTACK,
    SoyBoyParameter.EG_DECAY,
    SoyBoyParameter.EG_SUSTAIN,
    SoyBoyParameter.EG_RELEASE,
)
_DAC_PARAMS = (SoyBoyParameter.DAC_FREQ, SoyBoyParameter.DAC_Q)


class VoiceUnit(AudioProcessor[float]):
    """Plays one note through the selected oscillator."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._note_on_freq = 0.0
        self._freq = 0.0

        self._square_osc = SquareWaveOscillator()
        self._noise_osc = NoiseOscillator(rng)
        self._wavetable_osc = WaveTableOscillator(rng)
        self._sweep_osc = SweepOscillator()
        self._dac = DAConverter(22_000.0, 0.005)
        self._envelope_gen = EnvelopeGenerator()

        self._pitch = 0
        self._detune = 0
        self._selected_osc = OscillatorType.SQUARE

    @property
    def wavetable(self) -> Tuple[I4, ...]:
        """A copy of this voice's wave table."""
        return self._wavetable_osc.table

    @wavetable.setter
    def wavetable(self, samples: Sequence[I4]) -> None:
        self._wavetable_osc.table = samples

    def same_note(self, note: int) -> bool:
        return self._envelope_gen.same_note(note)

    def assignable(self, note: int) -> bool:
        return self._envelope_gen.assignable(note)

    def _bend(self) -> None:
        self.trigger(PitchBend(ratio=ratio_from_cents(self._pitch + self._detune)))

    def trigger(self, event: Event) -> None:
        if isinstance(event, NoteOn):
            self._note_on_freq = frequency_from_note_number(event.note)
            self._freq = self._note_on_freq
            self._sweep_osc.trigger(SweepReset(freq=self._freq))
            self._envelope_gen.trigger(event)
        elif isinstance(event, NoteOff):
            self._envelope_gen.trigger(event)
        elif isinstance(event, PitchBend):
            self._square_osc.trigger(event)
            self._wavetable_osc.trigger(event)
        elif isinstance(event, (SetWaveTable, ResetWaveTableAsSine, ResetWaveTableAtRandom)):
            self._wavetable_osc.trigger(event)

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        if param is SoyBoyParameter.PITCH_BEND:
            self._pitch = _as_i16(value)
            self._bend()
        elif param is SoyBoyParameter.DETUNE:
            self._detune = _as_i16(value)
            self._bend()
        elif param is SoyBoyParameter.OSCILLATOR_TYPE:
            try:
                self._selected_osc = OscillatorType(_as_index(value))
            except ValueError:
                pass
        elif param is SoyBoyParameter.SWEEP_TYPE:
            self._freq = self._note_on_freq
            self._sweep_osc.set_param(param, param_def, value)
        elif param in _SWEEP_PARAMS:
            self._sweep_osc.set_param(param, param_def, value)
        elif param in _ENVELOPE_PARAMS:
            self._envelope_gen.set_param(param, param_def, value)
        elif param is SoyBoyParameter.OSC_SQ_DUTY:
            self._square_osc.set_param(param, param_def, value)
        elif param is SoyBoyParameter.OSC_NS_INTERVAL:
            self._noise_osc.set_param(param, param_def, value)
        elif param in _DAC_PARAMS:
            self._dac.set_param(param, param_def, value)

    def get_param(self, param: SoyBoyParameter) -> float:
        if param is SoyBoyParameter.PITCH_BEND:
            return float(self._pitch)
        if param is SoyBoyParameter.DETUNE:
            return float(self._detune)
        if param is SoyBoyParameter.OSCILLATOR_TYPE:
            return float(self._selected_osc)
        if param is SoyBoyParameter.SWEEP_TYPE or param in _SWEEP_PARAMS:
            return self._sweep_osc.get_param(param)
        if param in _ENVELOPE_PARAMS:
            return self._envelope_gen.get_param(param)
        if param is SoyBoyParameter.OSC_SQ_DUTY:
            return self._square_osc.get_param(param)
        if param is SoyBoyParameter.OSC_NS_INTERVAL:
            return self._noise_osc.get_param(param)
        if param in _DAC_PARAMS:
            return self._dac.get_param(param)
        return 0.0

    def _oscillator(self) -> AudioProcessor[I4]:
        if self._selected_osc is OscillatorType.NOISE:
            return self._noise_osc
        if self._selected_osc is OscillatorType.WAVE_TABLE:
            return self._wavetable_osc
        return self._square_osc

    def process(self, sample_rate: float) -> float:
        if self._sweep_osc.clipped:
            osc = I4.ZERO
        else:
            self._freq += self._sweep_osc.process(sample_rate)
            oscillator = self._oscillator()
            oscillator.set_freq(self._freq)
            osc = oscillator.process(sample_rate)

        env = self._envelope_gen.process(sample_rate)
        return self._dac.process(sample_rate, osc * env)

    def set_freq(self, freq: float) -> None:
        """A voice takes its frequency from the notes it plays."""