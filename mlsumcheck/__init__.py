"""Multilinear and GKR round sumcheck protocols over the BLS12-381 scalar field."""

__version__ = "0.1.0"