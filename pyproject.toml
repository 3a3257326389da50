[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "circuitroute"
version = "0.1.0"
description = "Multi-threaded Lee-algorithm router for paths laid out on a 3D grid"
requires-python = ">=3.10"
dependencies = []
keywords = ["routing", "lee-algorithm", "maze", "circuit", "eda", "threads"]
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
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
circuitroute = "circuitroute.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["circuitroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
