[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rssiloc"
version = "0.1.0"
description = "Estimate a node's position and bearing from the RSSI of anchor position broadcasts"
requires-python = ">=3.10"
dependencies = []
keywords = ["rssi", "localization", "circle intersection", "wireless sensor network", "udp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rssiloc-anchor = "rssiloc.node:anchor_main"
rssiloc-unknown = "rssiloc.node:unknown_main"

[tool.hatch.build.targets.wheel]
packages = ["rssiloc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
