# soyboy

A small chiptune synthesizer engine. Each voice combines a 4-bit square,
noise or wavetable oscillator with a frequency sweep, a stepped ADSR
envelope with "stutter" retriggering, and a resonant low-pass filter that
stands in for the digital-to-analog converter. The `SoyBoy` class in
`soyboy.synth` mixes up to eight voices into a stereo signal.

The engine uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
import random

from soyboy.event import NoteOff, NoteOn
from soyboy.parameters import SoyBoyParameter, make_parameter_info
from soyboy.synth import SoyBoy

defs = make_parameter_info()
synth = SoyBoy(random.Random(0))

# Apply the default value of every parameter.
for param in SoyBoyParameter:
    param_def = defs[param]
    synth.set_param(param, param_def, param_def.default_value)

synth.trigger(NoteOn(note=69, velocity=1.0))
left, right = synth.process(44_100.0)
synth.trigger(NoteOff(note=69))
```

`process(sample_rate)` returns one sample per call; call it once for every
sample you need. A new `SoyBoy` plays four voices until `NUM_VOICES` is set.

### Parameters

`soyboy.parameters.make_parameter_info()` returns a dictionary that maps
each `SoyBoyParameter` to a `ParameterDef`. A definition converts between
the normalized range `0.0 .. 1.0` and the plain value with `normalize` and
`denormalize`, renders a normalized value for display with `format` (the
number or list element followed by the unit), and reads text back to a
normalized value with `parse`, which raises `ValueError` for text it cannot
read. `clamp` keeps a plain value inside the parameter's range;
`SoyBoy.set_param` applies it before passing the value to the voices.

The value mappings are `NonLinearParameter`, `LinearParameter`,
`IntegerParameter` and `ListParameter`. The helper functions
`make_global_parameters`, `make_square_oscillator_parameters`,
`make_noise_oscillator_parameters`, `make_wavetable_oscillator_parameters`,
`make_envelope_generator_parameters` and `make_dac_parameters` each return
one part of the full dictionary.

### Events

`soyboy.event` defines `NoteOn`, `NoteOff`, `PitchBend`, `SweepReset`,
`SetWaveTable`, `ResetWaveTableAsSine` and `ResetWaveTableAtRandom`. Pass
them to `trigger`. A `NoteOn` goes to the first active voice that can take
the note, a `NoteOff` to the voice playing that note, and every other event
to all voices. `event_from_id` builds the zeroed event for a numeric id and
raises `ValueError` for an unknown id.

### Wave table

`SoyBoy.wavetable` reads the first voice's 32-sample table and, when
assigned, sets the table of every active voice. Samples are `I4` values
from `soyboy.utils`: 4-bit numbers read signed from -8 to 7.

### Building blocks

Each component can also be used on its own:

- `soyboy.square_wave.SquareWaveOscillator`
- `soyboy.noise.NoiseOscillator`
- `soyboy.wave_table.WaveTableOscillator`
- `soyboy.sweep.SweepOscillator`
- `soyboy.envelope_generator.EnvelopeGenerator`
- `soyboy.dac.DAConverter`
- `soyboy.voice.VoiceUnit`

`NoiseOscillator`, `WaveTableOscillator`, `VoiceUnit` and `SoyBoy` accept
an optional `random.Random` instance, so their random tables can be
reproduced.

## What it does not do

The package only computes samples. It does not play sound on an audio
device, write audio files, read MIDI input, save or load settings, or
provide a command-line program or a user interface. Feeding events in and
sending the samples somewhere is up to the code that uses it.