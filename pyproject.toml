[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixmodem"
version = "0.1.0"
description = "XMODEM transfers over serial lines, with a simulated Raspberry Pi peripheral model"
requires-python = ">=3.10"
keywords = ["xmodem", "serial", "uart", "tty", "bootloader", "raspberry-pi"]
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
    "Topic :: Terminals :: Serial",
    "Topic :: Communications",
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = ["pyserial"]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ttywrite = "pixmodem.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pixmodem"]

[tool.pytest.ini_options]
addopts = "-ra"
