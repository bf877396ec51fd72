[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "psdkit"
version = "0.1.0"
description = "Layer trees, HTML layer reports and GNU-style option scanning for layered image documents"
requires-python = ">=3.10"
dependencies = []
keywords = ["psd", "layers", "html", "report", "getopt", "tree model", "png"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["psdkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
