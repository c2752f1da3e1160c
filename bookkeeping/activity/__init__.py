"""Activity logging package."""

from bookkeeping.activity.logger import ActivityLogger, get_logger

__all__ = ["ActivityLogger", "get_logger"]
