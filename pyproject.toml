[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kcmkit"
version = "0.1.0"
description = "Shared building blocks for key-management services: audit events, OTLP/JSON audit logging, in-memory key-value storage and small utilities."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["audit", "otlp", "logging", "key-management", "storage"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kcmkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
