"""Reward and combat resolution engine for a gamified task tracker."""

__version__ = "0.1.0"
