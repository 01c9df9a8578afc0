from __future__ import annotations

import asyncio
import logging

from supabase import Client

from tuturno.application.exceptions import BackendUnavailableError
from tuturno.application.ports.employee_directory import EmployeeDirectoryPort
from tuturno.domain.entities.booking import Employee
from tuturno.infrastructure.supabase.appointment_store import BACKEND_ERRORS
from tuturno.infrastructure.supabase.rows import normalize_employee_rows


EMPLOYEE_SELECT = "employee_id,employees(id,first_name,last_name,position,avatar_url,is_active)"


class SupabaseEmployeeDirectory(EmployeeDirectoryPort):
    def __init__(self, supabase: Client) -> None:
        self._supabase = supabase
        self._logger = logging.getLogger(__name__)

    def _fetch_rows(self, service_id: str) -> list[dict]:
        result = self._supabase.table("employee_services").select(EMPLOYEE_SELECT).eq("service_id", service_id).execute()
        return result.data or []

    async def get_employees_for_service(self, service_id: str) -> list[Employee]:
        # Sync client; run off the event loop.
        try:
            rows = await asyncio.to_thread(self._fetch_rows, service_id)
        except BACKEND_ERRORS as e:
            self._logger.error("Error fetching employees for service", extra={"service_id": service_id, "error": str(e)})
            raise BackendUnavailableError(str(e)) from e

        return normalize_employee_rows(rows)
