"""
Configuration Package
"""
from config.settings import settings, get_settings
from config.logging_config import LoggingConfig, setup_logging

__all__ = [
    "settings",
    "get_settings",
    "LoggingConfig",
    "setup_logging"
]

# Version info
__version__ = "1.0.0"
