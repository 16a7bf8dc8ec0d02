[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "soyboy"
version = "0.1.0"
description = "A 4-bit chiptune voice synthesizer engine with square, noise and wavetable oscillators"
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "chiptune", "audio", "dsp", "wavetable", "envelope"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["soyboy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
