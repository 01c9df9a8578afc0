from __future__ import annotations

import logging
from typing import Any

from tuturno.application.ports.notifications import NotificationPort


class MockNotifier(NotificationPort):
    def __init__(self) -> None:
        self.cancellations: list[tuple[str, str]] = []
        self.reschedule_emails: list[dict[str, Any]] = []
        self._logger = logging.getLogger(__name__)

    def send_cancellation_notification(self, appointment_id: str, reason: str) -> None:
        self._logger.info("Mock cancellation notification", extra={"appointment_id": appointment_id, "reason": reason})
        self.cancellations.append((appointment_id, reason))

    def send_reschedule_required_email(self, payload: dict[str, Any]) -> None:
        self._logger.info("Mock reschedule e-mail", extra={"appointment_id": payload.get("appointment_id")})
        self.reschedule_emails.append(payload)
