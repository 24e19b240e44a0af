"""Loader helpers for skill tree YAML files."""

from .errors import LoaderError

__all__ = ["LoaderError"]
