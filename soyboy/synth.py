"""The polyphonic synthesizer built from several voices."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence, Tuple

from soyboy.event import Event, NoteOff, NoteOn
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import I4, AudioProcessor, level
from soyboy.voice import VoiceUnit

MAX_NUMBER_OF_VOICES = 8

Signal = Tuple[float, float]


def _voice_count(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    return min(int(value), MAX_NUMBER_OF_VOICES)


class SoyBoy(AudioProcessor[Signal]):
    """Mixes the active voices into a stereo signal."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._voices = tuple(VoiceUnit(rng) for _ in range(MAX_NUMBER_OF_VOICES))
        self._num_voices = 4
        self._master_volume = 1.0

    @property
    def voices(self) -> Tuple[VoiceUnit, ...]:
        """Every voice, active or not."""
        return self._voices

    @property
    def _active_voices(self) -> Tuple[VoiceUnit, ...]:
        return self._voices[: self._num_voices]

    @property
    def wavetable(self) -> Tuple[I4, ...]:
        """The wave table of the first voice."""
        return self._voices[0].wavetable

    @wavetable.setter
    def wavetable(self, samples: Sequence[I4]) -> None:
        for voice in self._active_voices:
            voice.wavetable = samples

    def trigger(self, event: Event) -> None:
        if isinstance(event, NoteOn):
            voice = next((v for v in self._active_voices if v.assignable(event.note)), None)
            if voice is not None:
                voice.trigger(event)
        elif isinstance(event, NoteOff):
            voice = next((v for v in self._voices if v.same_note(event.note)), None)
            if voice is not None:
                voice.trigger(event)
        else:
            for voice in self._voices:
                voice.trigger(event)

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        value = param_def.clamp(value)
        if param is SoyBoyParameter.MASTER_VOLUME:
            self._master_volume = value
        elif param is SoyBoyParameter.NUM_VOICES:
            self._num_voices = _voice_count(value)
        else:
            for voice in self._voices:
                voice.set_param(param, param_def, value)

    def get_param(self, param: SoyBoyParameter) -> float:
        if param is SoyBoyParameter.MASTER_VOLUME:
            return self._master_volume
        if param is SoyBoyParameter.NUM_VOICES:
            return float(self._num_voices)
        return self._voices[0].get_param(param)

    def process(self, sample_rate: float) -> Signal:
        v = sum(voice.process(sample_rate) for voice in self._active_voices)
        v = v * level(self._master_volume)
        return (v, v)

    def set_freq(self, freq: float) -> None:
        """The synthesizer takes its frequencies from the notes it plays."""