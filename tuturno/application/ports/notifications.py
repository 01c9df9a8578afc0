from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class NotificationPort(ABC):
    @abstractmethod
    def send_cancellation_notification(self, appointment_id: str, reason: str) -> None:
        """Tell the business that a client cancelled an appointment."""
        raise NotImplementedError

    @abstractmethod
    def send_reschedule_required_email(self, payload: dict[str, Any]) -> None:
        """Ask a client to reschedule. The payload carries the signed action token."""
        raise NotImplementedError
