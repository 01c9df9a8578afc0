from __future__ import annotations

from dataclasses import replace

from tuturno.application.ports.appointment_store import AppointmentStorePort
from tuturno.domain.entities.appointment import Appointment, AppointmentStatus


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self, appointments: list[Appointment] | None = None) -> None:
        self._appointments: dict[str, Appointment] = {a.id: a for a in appointments or []}

    def add(self, appointment: Appointment) -> None:
        self._appointments[appointment.id] = appointment

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        return self._appointments.get(appointment_id)

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        current = self._appointments.get(appointment_id)
        if current is None:
            raise KeyError(appointment_id)
        self._appointments[appointment_id] = replace(current, status=status.value)
