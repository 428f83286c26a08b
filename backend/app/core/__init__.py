from app.core.config import Settings, get_settings, settings
from app.core.logging import TimelineLogger, get_logger

__all__ = ["Settings", "TimelineLogger", "get_logger", "get_settings", "settings"]
