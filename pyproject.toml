[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dkswarm"
version = "0.1.0"
description = "Session state, call-graph partitioning and per-group git commits for coordinating parallel code-editing agents"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["git", "refactoring", "call-graph", "partitioning", "agents", "sessions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dkswarm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
