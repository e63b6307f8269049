[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "veml7700"
version = "0.3.1"
description = "Driver for the VEML7700 high-accuracy ambient light sensor over an I2C bus"
requires-python = ">=3.10"
keywords = ["als", "ambient", "light", "sensor", "i2c", "veml7700"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Hardware Drivers",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["veml7700"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
