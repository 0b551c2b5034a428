[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dockscore"
version = "0.1.0"
description = "Pairwise scoring potentials, weighted scoring functions and flexible-body trees for molecular docking"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["docking", "scoring function", "vina", "vinardo", "autodock", "molecular modelling"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dockscore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
