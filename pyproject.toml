[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "openhush"
version = "0.5.0"
description = "Building blocks for a local voice-to-text keyboard: VAD segmentation, transcription queueing, custom vocabulary, platform helpers and crash reports"
requires-python = ">=3.11"
keywords = ["voice", "speech-to-text", "whisper", "transcription", "vad", "dictation", "vocabulary"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Speech",
    "Topic :: Adaptive Technologies",
    "Typing :: Typed",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["openhush"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
