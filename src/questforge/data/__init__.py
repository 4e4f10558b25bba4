"""Data layer utilities for loading JSON catalog definitions."""

from .errors import DataError, DataLoadError, DataReferenceError, DataValidationError
from .paths import get_definitions_path, get_package_root

__all__ = [
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "get_definitions_path",
    "get_package_root",
]
