[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cosmiqnotz"
version = "0.1.0"
description = "Offline-first notes with a local store, a sync queue, a small REST API and a few playful extras"
requires-python = ">=3.10"
keywords = ["notes", "offline", "sync", "rest", "flask", "moon-phase"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
]
dependencies = [
    "flask",
    "requests",
    "markupsafe",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
cosmiqnotz-api = "cosmiqnotz.api:main"
cosmiqnotz-moon-phase = "cosmiqnotz.moon_phase:main"

[tool.hatch.build.targets.wheel]
packages = ["cosmiqnotz"]

[tool.hatch.build.targets.sdist]
include = ["cosmiqnotz", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
