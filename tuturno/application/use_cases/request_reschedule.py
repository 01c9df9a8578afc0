from __future__ import annotations

import logging
from datetime import date
from typing import Any

from tuturno.application.exceptions import AppointmentNotFoundError
from tuturno.application.ports.appointment_store import AppointmentStorePort
from tuturno.application.ports.notifications import NotificationPort
from tuturno.infrastructure.security.action_token import AppointmentTokenSigner


class RequestRescheduleUseCase:
    """E-mail a client whose appointment falls on a day the business has closed."""

    def __init__(
        self,
        store: AppointmentStorePort,
        notifier: NotificationPort,
        signer: AppointmentTokenSigner,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._signer = signer
        self._logger = logging.getLogger(__name__)

    def execute(self, appointment_id: str, closed_date: date) -> dict[str, Any]:
        appointment = self._store.get_appointment(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)

        token = self._signer.generate(appointment_id)

        payload: dict[str, Any] = {
            "to": appointment.client_email,
            "user_name": appointment.client_name,
            "appointment_id": appointment_id,
            "token": token,
            "data": {
                "business_name": appointment.business_name,
                "closed_date": closed_date.isoformat(),
                "original_date": appointment.appointment_date.isoformat() if appointment.appointment_date else None,
                "original_time": appointment.start_time.strftime("%H:%M") if appointment.start_time else None,
                "service_name": appointment.service_name,
                "service_price": appointment.service_price,
            },
        }

        self._notifier.send_reschedule_required_email(payload)
        self._logger.info("Reschedule request sent", extra={"appointment_id": appointment_id})
        return payload
