[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bombgrid"
version = "0.1.0"
description = "A small multiplayer grid bomb game: TCP game server and pygame client"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "multiplayer", "bomberman", "arcade", "pygame", "tcp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
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

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bombgrid-server = "bombgrid.server:main"
bombgrid-client = "bombgrid.client:main"

[tool.hatch.build.targets.wheel]
packages = ["bombgrid"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
