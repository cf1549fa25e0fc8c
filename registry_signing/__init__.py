"""Signature validation for packages downloaded from a package registry."""

__version__ = "0.1.0"
