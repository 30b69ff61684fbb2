[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "genesistree"
version = "0.1.0"
description = "Record people and families, keep them in SQLite, exchange them as JSON and lay out family trees."
requires-python = ">=3.10"
dependencies = []
keywords = ["genealogy", "family tree", "ancestry", "sqlite", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Sociology :: Genealogy",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
genesistree = "genesistree.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["genesistree"]

[tool.pytest.ini_options]
addopts = "-ra"
