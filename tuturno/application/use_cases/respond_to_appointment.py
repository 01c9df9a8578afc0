from __future__ import annotations

import logging
from dataclasses import dataclass

from tuturno.application.exceptions import (
    AppointmentNotFoundError,
    AppointmentNotPendingError,
    InvalidActionError,
    InvalidTokenError,
    MissingParametersError,
)
from tuturno.application.ports.appointment_store import AppointmentStorePort
from tuturno.application.ports.notifications import NotificationPort
from tuturno.domain.entities.appointment import AppointmentAction, AppointmentStatus
from tuturno.infrastructure.security.action_token import AppointmentTokenSigner


CANCELLATION_REASON = "The client rejected the proposed changes"


@dataclass(frozen=True)
class RespondResult:
    action: AppointmentAction
    message: str
    redirect_url: str
    status: str


class RespondToAppointmentUseCase:
    """Apply a client's answer from an e-mailed action link to a pending appointment."""

    def __init__(
        self,
        store: AppointmentStorePort,
        notifier: NotificationPort,
        signer: AppointmentTokenSigner,
        client_appointments_path: str = "/dashboard/client/appointments",
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._signer = signer
        self._appointments_path = client_appointments_path.rstrip("/")
        self._logger = logging.getLogger(__name__)

    def execute(self, appointment_id: str, action: str | None, token: str | None) -> RespondResult:
        if not action or not token:
            raise MissingParametersError("action and token are required")

        try:
            parsed_action = AppointmentAction(action)
        except ValueError:
            raise InvalidActionError(f"Unknown action: {action}")

        # Token first: an unknown appointment and a bad signature must look the same.
        if not self._signer.validate(appointment_id, token):
            self._logger.warning("Rejected action token", extra={"appointment_id": appointment_id, "action": action})
            raise InvalidTokenError("Invalid or expired link")

        appointment = self._store.get_appointment(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)

        if not appointment.is_pending:
            raise AppointmentNotPendingError(appointment_id, appointment.status)

        if parsed_action is AppointmentAction.accept:
            self._store.update_status(appointment_id, AppointmentStatus.confirmed)
            self._logger.info("Client accepted changes", extra={"appointment_id": appointment_id})
            return RespondResult(
                action=parsed_action,
                message="Appointment confirmed",
                redirect_url=self._appointments_path,
                status=AppointmentStatus.confirmed.value,
            )

        if parsed_action is AppointmentAction.cancel:
            self._store.update_status(appointment_id, AppointmentStatus.cancelled)
            try:
                self._notifier.send_cancellation_notification(appointment_id, CANCELLATION_REASON)
            except Exception as e:
                self._logger.warning(
                    "Failed to send cancellation notification",
                    extra={"appointment_id": appointment_id, "error": str(e)},
                )
            self._logger.info("Client cancelled appointment", extra={"appointment_id": appointment_id})
            return RespondResult(
                action=parsed_action,
                message="Appointment cancelled",
                redirect_url=self._appointments_path,
                status=AppointmentStatus.cancelled.value,
            )

        return RespondResult(
            action=parsed_action,
            message="Redirecting to reschedule",
            redirect_url=f"{self._appointments_path}/{appointment_id}",
            status=appointment.status,
        )
