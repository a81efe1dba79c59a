"""Data models for widget configuration and discovery results."""
