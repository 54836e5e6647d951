[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wreck"
version = "0.3.4"
description = "Sphere collision tests with a structure-of-arrays bounding-sphere broadphase"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["collision", "geometry", "3d", "broadphase", "sphere"]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["wreck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
