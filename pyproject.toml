[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orgchart"
version = "0.1.0"
description = "Department and job records for an organisation chart, with JSON conversion, validation and SQLite storage"
requires-python = ">=3.10"
keywords = ["org-chart", "json", "sqlite", "records", "departments", "jobs"]
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
    "Topic :: Database",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["orgchart"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
