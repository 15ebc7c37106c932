[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proxyprep"
version = "0.1.0"
description = "Card list parsing and download planning for printing trading-card proxies, with style, colour cube, settings and plugin helpers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "proxy",
    "cards",
    "printing",
    "decklist",
    "mpc-autofill",
    "downloader",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Printing",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["proxyprep"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
