from .base_sink import NotificationSink
from .flash_messages import FlashMessageService

__all__ = ["NotificationSink", "FlashMessageService"]
