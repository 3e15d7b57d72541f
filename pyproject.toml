[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chainkeeper"
version = "0.1.0"
description = "Building blocks for a toolchain manager: settings, overrides, notifications, process launching and disk IO executors"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["toolchain", "installer", "settings", "overrides", "disk-io"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Installation/Setup",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chainkeeper"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
