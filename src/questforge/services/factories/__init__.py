"""Factories for runtime records."""

from .id_factory import make_instance_id

__all__ = ["make_instance_id"]
