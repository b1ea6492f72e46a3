[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ntagcluster"
version = "0.1.0"
description = "Containers for PMT hits, MC particles, taggable truth objects and tagging candidates in neutron-tagging analyses"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "neutron tagging", "PMT", "water Cherenkov", "clusters"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ntagcluster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
