import pytest

from soyboy.event import PitchBend
from soyboy.parameters import SoyBoyParameter, make_parameter_info
from soyboy.square_wave import SquareWaveDuty, SquareWaveOscillator
from soyboy.utils import I4

PARAMS = make_parameter_info()
DUTY = SoyBoyParameter.OSC_SQ_DUTY
LOW = I4.from_signed(I4.SIGNED_MIN)
HIGH = I4.from_signed(I4.SIGNED_MAX)


@pytest.mark.parametrize(
    "duty, ratio",
    [
        (SquareWaveDuty.RATIO_12_5, 0.125),
        (SquareWaveDuty.RATIO_25, 0.25),
        (SquareWaveDuty.RATIO_50, 0.5),
        (SquareWaveDuty.RATIO_75, 0.75),
    ],
)
def test_duty_ratios(duty, ratio):
    assert duty.ratio() == ratio


def test_zero_frequency_is_silent():
    osc = SquareWaveOscillator()
    osc.trigger(PitchBend(ratio=1.0))
    assert all(osc.process(44100.0) == I4.ZERO for _ in range(10))


@pytest.mark.parametrize("duty", list(SquareWaveDuty))
def test_low_fraction_matches_duty(duty):
    osc = SquareWaveOscillator()
    osc.set_param(DUTY, PARAMS[DUTY], float(duty))
    osc.trigger(PitchBend(ratio=1.0))
    osc.set_freq(100.0)
    samples = [osc.process(800.0) for _ in range(8)]
    assert samples.count(LOW) == duty.ratio() * 8
    assert samples.count(LOW) + samples.count(HIGH) == 8


def test_without_pitch_ratio_phase_stays():
    osc = SquareWaveOscillator()
    osc.set_freq(100.0)
    samples = [osc.process(800.0) for _ in range(16)]
    assert all(s == LOW for s in samples)


def test_duty_param_round_trip():
    osc = SquareWaveOscillator()
    osc.set_param(DUTY, PARAMS[DUTY], 1.0)
    assert osc.get_param(DUTY) == float(SquareWaveDuty.RATIO_25)
    assert osc.duty is SquareWaveDuty.RATIO_25


def test_invalid_duty_is_ignored():
    osc = SquareWaveOscillator()
    osc.set_param(DUTY, PARAMS[DUTY], 9.0)
    assert osc.duty is SquareWaveDuty.RATIO_50
    assert osc.get_param(SoyBoyParameter.DETUNE) == 0.0


def test_negative_duty_value_selects_first():
    osc = SquareWaveOscillator()
    osc.set_param(DUTY, PARAMS[DUTY], -3.0)
    assert osc.duty is SquareWaveDuty.RATIO_12_5