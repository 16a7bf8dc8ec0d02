"""A 4-bit chiptune synthesizer engine: oscillators, sweep, envelope, filter and voice mixing."""

__version__ = "0.1.0"