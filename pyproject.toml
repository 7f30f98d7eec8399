[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "turboxsl"
version = "0.1.0"
description = "Building blocks of a lightweight XML/XSLT processor: node trees, parsing, serialization, localization and extension functions"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "xslt", "parser", "serializer", "graphml", "localization", "po"]
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
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["turboxsl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
