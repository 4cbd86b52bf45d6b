[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vaultswap"
version = "0.1.0"
description = "Bulk maintenance operations on KV v2 secrets in a Vault server, each with a dry-run mode."
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["vault", "secrets", "kv", "devops", "automation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Security",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["vaultswap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
