[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastsense"
version = "0.1.0"
description = "Sensor messages, TSDF values, thread-safe buffers and ZeroMQ transport for a lidar/IMU SLAM pipeline"
requires-python = ">=3.10"
dependencies = [
    "pyzmq",
]
keywords = [
    "slam",
    "tsdf",
    "lidar",
    "imu",
    "point-cloud",
    "pcd",
    "zeromq",
    "ring-buffer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fastsense"]

[tool.hatch.build.targets.sdist]
include = [
    "fastsense",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
