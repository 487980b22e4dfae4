[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "ballplate"
version = "0.1.0"
description = "Controllers, state estimation and orientation kinematics for a ball-on-plate balancing robot"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["control", "kalman", "lqg", "lqr", "pd", "inverse-kinematics", "ball-and-plate", "robotics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
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

[tool.setuptools.packages.find]
include = ["ballplate*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
