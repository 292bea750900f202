"""Services supporting the launch actions."""

from proclaunch.services.config_manager import ConfigManager

__all__ = ["ConfigManager"]
