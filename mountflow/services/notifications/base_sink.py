from abc import ABC, abstractmethod


class NotificationSink(ABC):
    """Receives user-facing success/error messages."""

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def danger(self, message: str) -> None:
        pass
