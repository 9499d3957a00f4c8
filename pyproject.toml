[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "izumi"
version = "0.1.0"
description = "Terminal viewer for pipeline trace dumps of simulated processors"
requires-python = ">=3.10"
dependencies = []
keywords = ["pipeline", "trace", "processor", "simulator", "curses", "viewer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
izumi = "izumi.main:main"

[tool.setuptools]
packages = ["izumi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
