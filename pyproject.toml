[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xfcat"
version = "0.1.0"
description = "List, unpack and pack .cat/.dat game asset packages"
requires-python = ">=3.10"
keywords = ["cat", "dat", "archive", "package", "game", "mod", "md5"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Packaging",
]
dependencies = [
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
xfcat = "xfcat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["xfcat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
