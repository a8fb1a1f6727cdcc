[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amtrpc"
version = "0.1.0"
description = "Query an Intel AMT management engine over HECI/PTHI and parse smb:// file locations"
requires-python = ">=3.10"
dependencies = []
keywords = ["amt", "heci", "mei", "pthi", "smb"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["amtrpc"]

[tool.pytest.ini_options]
addopts = "-ra"
