[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdkcore"
version = "5.0.0"
description = "Core helpers for REST API client SDKs: date-time parsing, detailed responses, file metadata, gzip streams and Cloud Pak for Data authentication."
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["sdk", "rest", "authentication", "bearer-token", "gzip", "datetime"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["sdkcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
