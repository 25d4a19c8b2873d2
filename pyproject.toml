[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "icingadb"
version = "0.1.0"
description = "Icinga DB object model, Redis heartbeat handling and telemetry for synchronising Icinga 2 monitoring data"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "icinga",
    "icinga2",
    "icingadb",
    "monitoring",
    "redis",
    "history",
    "telemetry",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["icingadb"]

[tool.hatch.build.targets.sdist]
include = [
    "icingadb",
    "tests",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.coverage.run]
source = ["icingadb"]
branch = true

[tool.coverage.report]
show_missing = true
