"""Layered configuration (TOML files, environment variables)."""

from framegate.settings.config import CandidateOrder, Settings, get_settings

__all__ = ["CandidateOrder", "Settings", "get_settings"]
