[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nchoputa"
version = "0.1.0"
description = "A small web service that publishes sea level time series in a compact binary encoding, with plotting geometry helpers"
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["sea level", "time series", "oceanography", "graphs", "plotting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Oceanography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nchoputa = "nchoputa.server:main"

[tool.hatch.build.targets.wheel]
packages = ["nchoputa"]

[tool.pytest.ini_options]
addopts = "-ra"
