[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lostsignal"
version = "0.1.0"
description = "A colour-matching arcade dodger: keep your signal while lasers, jumpropes and clusterbombs fly past"
requires-python = ">=3.10"
keywords = ["game", "arcade", "pygame", "colour", "dodge"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lostsignal = "lostsignal.app:main"

[tool.hatch.build.targets.wheel]
packages = ["lostsignal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
