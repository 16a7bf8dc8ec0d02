import math
import random

import pytest

from soyboy.event import NoteOff, NoteOn, SetWaveTable
from soyboy.parameters import SoyBoyParameter, make_parameter_info
from soyboy.synth import MAX_NUMBER_OF_VOICES, SoyBoy
from soyboy.utils import I4
from soyboy.wave_table import WAVETABLE_SIZE

RATE = 44100.0
DEFS = make_parameter_info()


def set_param(synth, param, value):
    synth.set_param(param, DEFS[param], value)


def apply_defaults(synth):
    for param, param_def in DEFS.items():
        synth.set_param(param, param_def, param_def.default_value)


def run(synth, samples):
    return [synth.process(RATE) for _ in range(samples)]


def test_initial_settings():
    synth = SoyBoy(random.Random(0))
    assert synth.get_param(SoyBoyParameter.NUM_VOICES) == 4.0
    assert synth.get_param(SoyBoyParameter.MASTER_VOLUME) == 1.0
    assert len(synth.voices) == MAX_NUMBER_OF_VOICES


def test_num_voices_is_clamped():
    synth = SoyBoy(random.Random(0))
    set_param(synth, SoyBoyParameter.NUM_VOICES, 20.0)
    assert synth.get_param(SoyBoyParameter.NUM_VOICES) == 8.0


def test_master_volume_is_clamped():
    synth = SoyBoy(random.Random(0))
    set_param(synth, SoyBoyParameter.MASTER_VOLUME, 100.0)
    assert synth.get_param(SoyBoyParameter.MASTER_VOLUME) == 6.0


def test_voice_params_reach_every_voice():
    synth = SoyBoy(random.Random(0))
    set_param(synth, SoyBoyParameter.EG_ATTACK, 0.5)
    assert synth.get_param(SoyBoyParameter.EG_ATTACK) == 0.5
    assert all(v.get_param(SoyBoyParameter.EG_ATTACK) == 0.5 for v in synth.voices)


def test_silent_without_notes():
    synth = SoyBoy(random.Random(0))
    apply_defaults(synth)
    assert all(s == (0.0, 0.0) for s in run(synth, 100))


def test_both_channels_match_and_are_finite():
    synth = SoyBoy(random.Random(0))
    apply_defaults(synth)
    synth.trigger(NoteOn(note=60, velocity=1.0))
    synth.trigger(NoteOn(note=64, velocity=1.0))
    out = run(synth, 2000)
    assert all(left == right and math.isfinite(left) for left, right in out)
    assert any(left != 0.0 for left, _ in out)


def test_silent_master_volume_mutes_output():
    synth = SoyBoy(random.Random(0))
    apply_defaults(synth)
    set_param(synth, SoyBoyParameter.MASTER_VOLUME, -math.inf)
    synth.trigger(NoteOn(note=60, velocity=1.0))
    assert all(s == (0.0, 0.0) for s in run(synth, 500))


def test_notes_go_to_separate_voices():
    synth = SoyBoy(random.Random(0))
    synth.trigger(NoteOn(note=60, velocity=1.0))
    synth.trigger(NoteOn(note=62, velocity=1.0))
    assert synth.voices[0].same_note(60)
    assert synth.voices[1].same_note(62)


def test_note_dropped_when_all_voices_busy():
    synth = SoyBoy(random.Random(0))
    set_param(synth, SoyBoyParameter.NUM_VOICES, 1.0)
    synth.trigger(NoteOn(note=60, velocity=1.0))
    synth.trigger(NoteOn(note=62, velocity=1.0))
    assert synth.voices[0].same_note(60)
    assert not any(v.same_note(62) for v in synth.voices)


def test_note_off_releases_voice():
    synth = SoyBoy(random.Random(0))
    synth.trigger(NoteOn(note=60, velocity=1.0))
    assert not synth.voices[0].assignable(62)
    synth.trigger(NoteOff(note=60))
    assert synth.voices[0].assignable(62)


def test_wavetable_set_on_active_voices_only():
    synth = SoyBoy(random.Random(0))
    original = synth.wavetable
    set_param(synth, SoyBoyParameter.NUM_VOICES, 2.0)
    table = tuple(I4(i % 16) for i in range(WAVETABLE_SIZE))
    synth.wavetable = table
    assert synth.wavetable == table
    assert synth.voices[1].wavetable == table
    assert synth.voices[5].wavetable == original


def test_other_events_reach_all_voices():
    synth = SoyBoy(random.Random(0))
    sample = I4.from_signed(2)
    synth.trigger(SetWaveTable(idx=3, value=sample))
    assert all(v.wavetable[3] == sample for v in synth.voices)


def test_same_seed_gives_same_output():
    outputs = []
    for _ in range(2):
        synth = SoyBoy(random.Random(9))
        apply_defaults(synth)
        set_param(synth, SoyBoyParameter.OSCILLATOR_TYPE, 1.0)
        synth.trigger(NoteOn(note=50, velocity=0.7))
        outputs.append(run(synth, 300))
    assert outputs[0] == outputs[1]


def test_wrong_size_wavetable_rejected():
    synth = SoyBoy(random.Random(0))
    original = synth.wavetable
    with pytest.raises(ValueError):
        synth.wavetable = (I4.ZERO,) * (WAVETABLE_SIZE + 1)
    assert synth.wavetable == original
    assert len(synth.wavetable) == WAVETABLE_SIZE