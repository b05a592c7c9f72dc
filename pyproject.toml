[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "c4kit"
version = "0.1.0"
description = "C4 content identifiers: ID trees, file manifests and content-addressed stores"
requires-python = ">=3.10"
dependencies = []
keywords = ["c4", "content-addressing", "sha512", "merkle-tree", "manifest", "storage"]
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
    "Topic :: System :: Archiving",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["c4kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
