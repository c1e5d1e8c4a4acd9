[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coremark"
version = "1.0.0"
description = "A CPU benchmark exercising linked lists, matrix arithmetic and a state machine, with CRC-validated results"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "cpu", "crc", "performance"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coremark = "coremark.main:main"

[tool.hatch.build.targets.wheel]
packages = ["coremark"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
