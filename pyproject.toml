[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vulnscope"
version = "3.0.0"
description = "Vulnerability detection with MITRE ATT&CK mapping, scan simulation, configuration and web detector modules"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "security",
    "vulnerability",
    "scanner",
    "mitre",
    "att&ck",
    "xss",
    "xxe",
    "xpath",
    "simulation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vulnscope"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
