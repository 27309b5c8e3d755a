[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diplotree"
version = "0.1.0"
description = "A small hierarchical key/value database stored as an XML document"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "tree", "hierarchical", "xml", "key-value"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["diplotree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
