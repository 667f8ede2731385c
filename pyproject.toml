[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zeroledger"
version = "0.1.0"
description = "Ledger building blocks: account records, transfers, account store, transfer log, staking, snapshots, fee splitting and bridge attestations"
requires-python = ">=3.11"
keywords = ["ledger", "payments", "ed25519", "staking", "bridge", "snapshot"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["zeroledger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
