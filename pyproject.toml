[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smfwrite"
version = "1.0.0"
description = "Write single-track Standard MIDI Files event by event, with a delta-time sequencer for live recording"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "smf", "standard midi file", "recording", "sequencer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
smfwrite-example = "smfwrite.basic:main"

[tool.hatch.build.targets.wheel]
packages = ["smfwrite"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
