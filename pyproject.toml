[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdforge"
version = "0.1.0"
description = "Markdown inline and block HTML rendering with Markdown Extra and GitHub-flavoured extensions"
requires-python = ">=3.10"
dependencies = []
keywords = ["markdown", "html", "markup", "footnotes", "smartypants", "option-parsing"]
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
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mdforge"]

[tool.hatch.build.targets.sdist]
include = ["mdforge", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
