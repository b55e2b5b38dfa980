[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ths8200regs"
version = "0.1.0"
description = "Register map model, encoder and decoder for the THS8200 video DAC"
requires-python = ">=3.10"
dependencies = []
keywords = ["ths8200", "video", "dac", "i2c", "registers", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ths8200regs = "ths8200regs.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ths8200regs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
