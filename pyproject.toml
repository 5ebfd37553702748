[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unilager"
version = "0.1.0"
description = "Unidirectional data-flow stores, dependency bags, lenses and event loops for interactive programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["unidirectional", "redux", "store", "lenses", "dependency-injection", "event-loop"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["unilager"]

[tool.pytest.ini_options]
addopts = "-ra"
