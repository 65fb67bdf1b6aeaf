[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "s2sgeo"
version = "1.0.0"
description = "Location smoothing, S2 cell indexing and context injection for speech-to-speech assistants"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "gis",
    "s2",
    "geospatial",
    "kalman-filter",
    "location",
    "pedestrian-dead-reckoning",
    "shared-memory",
]
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
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
s2sgeo-daemon = "s2sgeo.daemon:main"

[tool.hatch.build.targets.wheel]
packages = ["s2sgeo"]

[tool.hatch.build.targets.sdist]
include = [
    "s2sgeo",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
