"""Configuration module -- exports Settings."""

from noteflow.config.settings import Settings

__all__ = ["Settings"]
