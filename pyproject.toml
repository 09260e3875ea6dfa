[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mp4atoms"
version = "0.8.1"
description = "Low-level encoder and decoder for MP4/ISOBMFF atoms"
requires-python = ">=3.10"
dependencies = []
keywords = ["mp4", "isobmff", "mp4box", "fmp4", "heif", "avif", "video"]
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
    "Topic :: Multimedia :: Video",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mp4atoms-info = "mp4atoms.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mp4atoms"]

[tool.pytest.ini_options]
addopts = "-ra"
