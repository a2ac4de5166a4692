[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jagaimo"
version = "0.1.0"
description = "Parser for a compact command-line interface specification language"
requires-python = ">=3.11"
dependencies = []
keywords = ["cli", "argument-parsing", "dsl", "parser", "specification"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jagaimo = "jagaimo.spec:main"

[tool.hatch.build.targets.wheel]
packages = ["jagaimo"]

[tool.pytest.ini_options]
addopts = "-ra"
