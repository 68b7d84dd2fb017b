"""Kernel – shared primitives with no pipeline dependencies."""
