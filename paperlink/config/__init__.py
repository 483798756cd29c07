"""Configuration module for paperlink."""

from .settings import Settings, get_settings
from .llm_providers import get_llm

__all__ = [
    "Settings",
    "get_settings",
    "get_llm",
]
