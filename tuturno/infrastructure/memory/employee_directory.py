from __future__ import annotations

from tuturno.application.ports.employee_directory import EmployeeDirectoryPort
from tuturno.domain.entities.booking import Employee


class MemoryEmployeeDirectory(EmployeeDirectoryPort):
    def __init__(
        self,
        employees_by_service: dict[str, list[Employee]] | None = None,
        failing_services: set[str] | None = None,
    ) -> None:
        self._employees = dict(employees_by_service or {})
        self._failing = set(failing_services or ())

    async def get_employees_for_service(self, service_id: str) -> list[Employee]:
        if service_id in self._failing:
            raise RuntimeError(f"Lookup failed for service {service_id}")
        return [e for e in self._employees.get(service_id, []) if e.is_active]
