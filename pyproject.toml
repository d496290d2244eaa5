[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mlsumcheck"
version = "0.1.0"
description = "Sumcheck protocols for products of multilinear polynomials and GKR round functions over the BLS12-381 scalar field"
requires-python = ">=3.10"
dependencies = []
keywords = ["sumcheck", "gkr", "multilinear", "fiat-shamir", "interactive-proof", "bls12-381"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mlsumcheck"]

[tool.pytest.ini_options]
addopts = "-ra"
