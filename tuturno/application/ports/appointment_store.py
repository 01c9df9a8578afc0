from __future__ import annotations

from abc import ABC, abstractmethod

from tuturno.domain.entities.appointment import Appointment, AppointmentStatus


class AppointmentStorePort(ABC):
    @abstractmethod
    def get_appointment(self, appointment_id: str) -> Appointment | None:
        """Get appointment with business, client and service details. Returns None if not found."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        raise NotImplementedError
