[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bytebeat_dsp"
version = "1.16.0"
description = "Fixed-point audio building blocks for a bytebeat groovebox: drum voices, an AR envelope, effects and output encoders."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bytebeat",
    "dsp",
    "audio",
    "synthesis",
    "drum-machine",
    "reverb",
    "chorus",
    "fixed-point",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bytebeat_dsp"]

[tool.pytest.ini_options]
addopts = "-ra"
