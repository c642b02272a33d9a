"""
Configuration package for the complaint desk service.

Environment settings are loaded once and shared across the application.
"""

from app.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
