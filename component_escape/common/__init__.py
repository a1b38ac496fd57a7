"""
Common low-level utilities with minimal dependencies.

This package contains fundamental utilities that don't depend on
the rest of the package to avoid circular imports.
"""
