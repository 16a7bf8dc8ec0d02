import random

import pytest

from soyboy.event import PitchBend, ResetWaveTableAsSine, ResetWaveTableAtRandom, SetWaveTable
from soyboy.parameters import SoyBoyParameter, make_parameter_info
from soyboy.utils import I4
from soyboy.wave_table import WAVETABLE_SIZE, WaveTableOscillator

PARAMS = make_parameter_info()


def test_initial_table_is_sine():
    osc = WaveTableOscillator(random.Random(0))
    table = osc.table
    assert len(table) == WAVETABLE_SIZE
    assert table[0] == I4.ZERO
    quarter = WAVETABLE_SIZE // 4
    assert int(table[quarter]) == max(int(v) for v in table)
    assert int(table[3 * quarter]) == min(int(v) for v in table)


def test_randomize_then_reset_restores_sine():
    osc = WaveTableOscillator(random.Random(2))
    sine = osc.table
    osc.trigger(ResetWaveTableAtRandom())
    assert all(0 <= v.raw < I4.MAX for v in osc.table)
    osc.trigger(ResetWaveTableAsSine())
    assert osc.table == sine


def test_randomize_is_deterministic_with_seed():
    a = WaveTableOscillator(random.Random(11))
    b = WaveTableOscillator(random.Random(11))
    a.randomize()
    b.randomize()
    assert a.table == b.table


def test_set_sample_and_ignore_out_of_range():
    osc = WaveTableOscillator(random.Random(0))
    value = I4.from_signed(-5)
    osc.trigger(SetWaveTable(idx=3, value=value))
    before = osc.table
    osc.trigger(SetWaveTable(idx=WAVETABLE_SIZE, value=value))
    assert osc.table[3] == value
    assert osc.table == before


def test_playback_steps_through_table():
    osc = WaveTableOscillator(random.Random(4))
    osc.randomize()
    osc.trigger(PitchBend(ratio=1.0))
    osc.set_freq(100.0)
    samples = [osc.process(3200.0) for _ in range(WAVETABLE_SIZE * 2)]
    assert tuple(samples) == osc.table * 2


def test_without_pitch_ratio_phase_stays():
    osc = WaveTableOscillator(random.Random(4))
    osc.randomize()
    osc.set_freq(100.0)
    assert all(osc.process(3200.0) == osc.table[0] for _ in range(10))


def test_table_setter_checks_length():
    osc = WaveTableOscillator(random.Random(0))
    new_table = [I4.from_signed(1)] * WAVETABLE_SIZE
    osc.table = new_table
    assert osc.table == tuple(new_table)
    with pytest.raises(ValueError):
        osc.table = new_table[:-1]


def test_params_are_inert():
    osc = WaveTableOscillator(random.Random(0))
    before = osc.table
    osc.set_param(SoyBoyParameter.DAC_Q, PARAMS[SoyBoyParameter.DAC_Q], 3.0)
    assert osc.get_param(SoyBoyParameter.DAC_Q) == 0.0
    assert osc.table == before