[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goql"
version = "0.1.0"
description = "A small SQL-like query toolkit: lexer, SELECT parser, typed values, table and function registries, LIKE patterns and row ordering"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "query", "lexer", "parser"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["goql"]

[tool.pytest.ini_options]
addopts = "-ra"
