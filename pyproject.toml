[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zkbench"
version = "0.1.0"
description = "Benchmarks for regular and zk-friendly hash functions over 512-bit messages, with a small R1CS toolkit"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "zero-knowledge",
    "hash",
    "poseidon2",
    "skyscraper",
    "keccak",
    "bn254",
    "montgomery",
    "r1cs",
    "benchmark",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
zkbench = "zkbench.bench:main"

[tool.hatch.build.targets.wheel]
packages = ["zkbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
