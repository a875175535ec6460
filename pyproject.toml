[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termvelocity"
version = "0.1.0"
description = "A 3D asteroid-dodging arcade game rendered in the terminal with a small software rasterizer"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "terminal", "ansi", "rasterizer", "3d", "asteroids"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
termvelocity = "termvelocity.app:main"

[tool.hatch.build.targets.wheel]
packages = ["termvelocity"]

[tool.pytest.ini_options]
addopts = "-ra"
