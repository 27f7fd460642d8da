[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "donowlist"
version = "0.1.0"
description = "Work out which items are ready and which actions belong at the top of a do-now list, from items, dependencies, urgency plans and in-the-moment priorities."
requires-python = ">=3.10"
keywords = ["todo", "scheduling", "priorities", "urgency", "planning"]
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
    "Topic :: Office/Business :: Scheduling",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["donowlist"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
