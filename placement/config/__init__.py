"""
Configuration package for the placement intake engine.

Holds the environment-driven settings shared by the database layer,
logging, identity resolution and the onboarding/allocation policies.
"""

from placement.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
