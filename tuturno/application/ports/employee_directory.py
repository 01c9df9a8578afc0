from __future__ import annotations

from abc import ABC, abstractmethod

from tuturno.domain.entities.booking import Employee


class EmployeeDirectoryPort(ABC):
    @abstractmethod
    async def get_employees_for_service(self, service_id: str) -> list[Employee]:
        """Get active employees able to perform a service. Raises on lookup failure."""
        raise NotImplementedError
