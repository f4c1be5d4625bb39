[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "repotree"
version = "0.1.0"
description = "Read version-control and web-server logs as commits and model the directory tree they change"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "bazaar", "cvs", "cvs2cl", "apache", "commit log", "repository", "directory tree"]
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
    "Topic :: Software Development :: Version Control",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["repotree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
