[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vino"
version = "0.1.0"
description = "A small visual novel engine: a binary story instruction reader on top of a pygame GUI toolkit"
requires-python = ">=3.10"
keywords = ["visual novel", "game engine", "pygame", "virtual machine", "gui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vino = "vino.vm.app:main"
vino-demo = "vino.gui.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["vino"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
