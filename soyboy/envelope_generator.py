"""ADSR envelope generator with an optional note stutter."""

from __future__ import annotations

import math
from enum import Enum, IntEnum, auto

from soyboy.event import Event, NoteOff, NoteOn
from soyboy.parameters import ParameterDef, SoyBoyParameter
from soyboy.utils import AudioProcessor, discrete_loudness, flush, linear

_U32_MAX = 2**32 - 1


def _as_index(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    return int(min(value, _U32_MAX))


def _reciprocal(value: float) -> float:
    """``1.0 / value`` giving an infinity for zero instead of raising."""
    if value == 0.0:
        return math.copysign(math.inf, value)
    return 1.0 / value


class StartTiming(IntEnum):
    """When a stutter begins."""

    NOTE_OFF = 0
    NOTE_ON = 1


class EnvelopeState(Enum):
    ATTACK = auto()
    DECAY = auto()
    SUSTAIN = auto()
    RELEASE = auto()
    OFF = auto()


_SOUNDING_STATES = (EnvelopeState.ATTACK, EnvelopeState.DECAY, EnvelopeState.SUSTAIN)


class EnvelopeGenerator(AudioProcessor[float]):
    """Produces a stepped 4-bit style loudness curve for one note."""

    def __init__(self) -> None:
        self._attack = 0.05
        self._decay = 0.05
        self._sustain = 0.3
        self._release = 0.1
        self._stutter_time = 0.1
        self._stutter_depth = 0.0
        self._stutter_when = StartTiming.NOTE_ON

        self._velocity = 0.0
        self._note = 0
        self._state = EnvelopeState.OFF
        self._elapsed_samples = 1
        self._last_value = 0.0
        self._last_state_value = 0.0

        self._note_on = False
        self._stuttering = False
        self._stuttering_samples = 0
        self._stutter_velocity = 1.0

    @property
    def state(self) -> EnvelopeState:
        """The current envelope stage."""
        return self._state

    def same_note(self, note: int) -> bool:
        return self._note == note

    def assignable(self, note: int) -> bool:
        """Whether a new note may take over this envelope."""
        same_note = self.same_note(note)
        silent = self._state in (EnvelopeState.RELEASE, EnvelopeState.OFF)
        if self._stutter_when is StartTiming.NOTE_ON:
            return same_note or not self._note_on
        return same_note or silent or self._stuttering

    def set_state(self, state: EnvelopeState) -> None:
        """Enter ``state``, remembering the level the previous stage reached."""
        if self._state in _SOUNDING_STATES:
            self._last_state_value = self._last_value
        self._state = state
        self._elapsed_samples = 0

    def _update_state(self, s: float) -> None:
        if self._state is EnvelopeState.ATTACK:
            if s > self._attack:
                self.set_state(EnvelopeState.DECAY)
                self._last_state_value = 1.0
        elif self._state is EnvelopeState.DECAY:
            if s > self._decay:
                self.set_state(EnvelopeState.SUSTAIN)
        elif self._state is EnvelopeState.RELEASE:
            if s > self._release:
                self.set_state(EnvelopeState.OFF)

    def _calculate(self, s: float) -> float:
        if self._state is EnvelopeState.ATTACK:
            return linear(s, _reciprocal(self._attack))
        if self._state is EnvelopeState.DECAY:
            sustain = flush(self._sustain)
            span = self._last_state_value - sustain
            return self._last_state_value - span * linear(s, _reciprocal(self._decay))
        if self._state is EnvelopeState.SUSTAIN:
            return flush(self._sustain)
        if self._state is EnvelopeState.RELEASE:
            peak = self._last_state_value
            return peak - peak * linear(s, _reciprocal(self._release))
        return 0.0

    def _stutter(self, sample_rate: float) -> None:
        if not self._stuttering:
            return
        self._stuttering_samples += 1
        elapsed_sec = self._stuttering_samples / sample_rate

        if self._stutter_depth != 0.0 and elapsed_sec > self._stutter_time:
            self._stutter_velocity -= 1.0 - self._stutter_depth / 100.0
            self._stuttering_samples = 0

            if self._stutter_velocity > 0.05:
                self.set_state(EnvelopeState.ATTACK)
            else:
                self.set_state(EnvelopeState.OFF)
                self._stutter_velocity = 0.0
                self._stuttering = False

    def _start_stutter(self, note_on: bool) -> None:
        if self._stutter_depth == 0.0:
            self._stuttering = False
            self._stutter_velocity = 0.0
            return
        starts_now = note_on == (self._stutter_when is StartTiming.NOTE_ON)
        if starts_now:
            self._stuttering = True
            self._stuttering_samples = 0
            self._stutter_velocity = 1.0
        else:
            self._stuttering = False
            self._stutter_velocity = 0.0

    def process(self, sample_rate: float) -> float:
        sec = self._elapsed_samples / sample_rate

        self._stutter(sample_rate)
        self._update_state(sec)
        v = flush(self._calculate(sec))
        self._last_value = v
        self._elapsed_samples += 1

        if self._stuttering and self._stutter_depth != 0.0:
            return discrete_loudness(v) * self._stutter_velocity * self._velocity
        return discrete_loudness(v) * self._velocity

    def set_freq(self, freq: float) -> None:
        """The envelope does not depend on pitch."""

    def trigger(self, event: Event) -> None:
        if isinstance(event, NoteOn):
            self._note_on = True
            self._note = event.note
            self.set_state(EnvelopeState.ATTACK)
            self._velocity = event.velocity
            self._start_stutter(True)
        elif isinstance(event, NoteOff):
            if event.note == self._note:
                self._note_on = False
                self.set_state(EnvelopeState.RELEASE)
                if self._stutter_when is StartTiming.NOTE_OFF:
                    self._start_stutter(False)

    def set_param(self, param: SoyBoyParameter, param_def: ParameterDef, value: float) -> None:
        if param is SoyBoyParameter.EG_ATTACK:
            self._attack = value
        elif param is SoyBoyParameter.EG_DECAY:
            self._decay = value
        elif param is SoyBoyParameter.EG_SUSTAIN:
            self._sustain = value
        elif param is SoyBoyParameter.EG_RELEASE:
            self._release = value
        elif param is SoyBoyParameter.STUTTER_TIME:
            self._stutter_time = value
        elif param is SoyBoyParameter.STUTTER_DEPTH:
            self._stutter_depth = value
        elif param is SoyBoyParameter.STUTTER_WHEN:
            try:
                self._stutter_when = StartTiming(_as_index(value))
            except ValueError:
                pass

    def get_param(self, param: SoyBoyParameter) -> float:
        values = {
            SoyBoyParameter.EG_ATTACK: self._attack,
            SoyBoyParameter.EG_DECAY: self._decay,
            SoyBoyParameter.EG_SUSTAIN: self._sustain,
            SoyBoyParameter.EG_RELEASE: self._release,
            SoyBoyParameter.STUTTER_TIME: self._stutter_time,
            SoyBoyParameter.STUTTER_DEPTH: self._stutter_depth,
            SoyBoyParameter.STUTTER_WHEN: float(self._stutter_when),
        }
        return values.get(param, 0.0)