[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mindviewer"
version = "1.0.0"
description = "Terminal viewer and decoder for ThinkGear EEG headset packet streams"
requires-python = ">=3.10"
keywords = ["eeg", "thinkgear", "tgam", "brainwave", "serial", "viewer", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial",
    "rich",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mindviewer = "mindviewer.main:main"

[tool.hatch.build.targets.wheel]
packages = ["mindviewer"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
