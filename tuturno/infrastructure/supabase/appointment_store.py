from __future__ import annotations

import logging

import httpx
from supabase import Client, PostgrestAPIError

from tuturno.application.exceptions import BackendUnavailableError
from tuturno.application.ports.appointment_store import AppointmentStorePort
from tuturno.domain.entities.appointment import Appointment, AppointmentStatus
from tuturno.infrastructure.supabase.rows import normalize_appointment_row


APPOINTMENT_SELECT = (
    "*,"
    "business:businesses(id,name,owner_id),"
    "users(email,first_name,last_name),"
    "appointment_services(price,service:services(name))"
)

# Any of these means the backend answer is unusable.
BACKEND_ERRORS = (PostgrestAPIError, httpx.HTTPError, ValueError)


class SupabaseAppointmentStore(AppointmentStorePort):
    def __init__(self, supabase: Client) -> None:
        self._supabase = supabase
        self._logger = logging.getLogger(__name__)

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        try:
            result = (
                self._supabase.table("appointments")
                .select(APPOINTMENT_SELECT)
                .eq("id", appointment_id)
                .limit(1)
                .execute()
            )
        except BACKEND_ERRORS as e:
            self._logger.error("Error fetching appointment", extra={"appointment_id": appointment_id, "error": str(e)})
            raise BackendUnavailableError(str(e)) from e

        if not result.data:
            return None
        return normalize_appointment_row(result.data[0])

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        try:
            self._supabase.table("appointments").update({"status": status.value}).eq("id", appointment_id).execute()
        except BACKEND_ERRORS as e:
            self._logger.error(
                "Error updating appointment",
                extra={"appointment_id": appointment_id, "status": status.value, "error": str(e)},
            )
            raise BackendUnavailableError(str(e)) from e

        self._logger.info("Appointment status updated", extra={"appointment_id": appointment_id, "status": status.value})
