[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slstatus"
version = "1.1"
description = "A small status monitor that renders system information as one line of text"
requires-python = ">=3.10"
dependencies = []
keywords = ["status", "statusbar", "monitor", "system-information", "window-manager"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
slstatus = "slstatus.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["slstatus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
