"""Scaffold clean-architecture Flutter features from an OpenAPI document."""

__version__ = "0.3.0"
