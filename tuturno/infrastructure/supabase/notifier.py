from __future__ import annotations

import logging
from typing import Any

import httpx
from supabase import Client, FunctionsError

from tuturno.application.exceptions import BackendUnavailableError
from tuturno.application.ports.notifications import NotificationPort


CANCELLATION_FUNCTION = "send-cancellation-business-notification"
RESCHEDULE_REQUIRED_FUNCTION = "send-reschedule-required-email"


class EdgeFunctionNotifier(NotificationPort):
    """Dispatch e-mails through the backend's edge functions."""

    def __init__(self, supabase: Client) -> None:
        self._supabase = supabase
        self._logger = logging.getLogger(__name__)

    def _invoke(self, function: str, payload: dict[str, Any]) -> None:
        try:
            self._supabase.functions.invoke(function, invoke_options={"body": payload})
        except (FunctionsError, httpx.HTTPError, ValueError) as e:
            self._logger.error("Edge function call failed", extra={"reason": function, "error": str(e)})
            raise BackendUnavailableError(f"{function} failed: {e}") from e

        self._logger.info("Edge function call succeeded", extra={"reason": function})

    def send_cancellation_notification(self, appointment_id: str, reason: str) -> None:
        self._invoke(
            CANCELLATION_FUNCTION,
            {"appointmentId": appointment_id, "cancellationReason": reason},
        )

    def send_reschedule_required_email(self, payload: dict[str, Any]) -> None:
        self._invoke(RESCHEDULE_REQUIRED_FUNCTION, payload)
