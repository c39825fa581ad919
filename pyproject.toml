[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parteescript"
version = "0.1.0"
description = "Lexer and Pratt parser for the Partee scripting language (.par files)"
requires-python = ">=3.10"
keywords = ["lexer", "parser", "pratt", "scripting", "ast", "syntax-tree"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
parteescript = "parteescript.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["parteescript"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
