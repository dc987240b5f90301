[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "holetracer"
version = "0.1.0"
description = "CPU ray marching of a Schwarzschild black hole with photon ring and Einstein ring, plus accretion disk and shader helpers"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "black hole",
    "ray tracing",
    "ray marching",
    "schwarzschild",
    "accretion disk",
    "gravitational lensing",
    "rendering",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
holetracer = "holetracer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["holetracer"]

[tool.pytest.ini_options]
addopts = "-ra"
