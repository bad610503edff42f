[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wavmenu"
version = "0.1.0"
description = "Terminal menu player for PCM WAV files with pause, resume and software volume control"
requires-python = ">=3.10"
keywords = ["wav", "pcm", "audio", "player", "terminal", "menu"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wavmenu = "wavmenu.menu:main"

[tool.hatch.build.targets.wheel]
packages = ["wavmenu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
