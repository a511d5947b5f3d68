[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gyropilot"
version = "0.1.0"
description = "Attitude and altitude estimation helpers for a small autogyro autopilot"
requires-python = ">=3.10"
dependencies = []
keywords = ["autopilot", "autogyro", "sensor-fusion", "kalman", "imu", "barometer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gyropilot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
