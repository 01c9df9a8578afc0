from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"
    no_show = "no_show"


class AppointmentAction(str, Enum):
    accept = "accept"
    cancel = "cancel"
    reschedule = "reschedule"


@dataclass(frozen=True)
class Appointment:
    id: str
    status: str
    business_id: str | None = None
    business_name: str | None = None
    appointment_date: date | None = None
    start_time: time | None = None
    client_email: str | None = None
    client_first_name: str | None = None
    client_last_name: str | None = None
    service_name: str | None = None
    service_price: float | None = None

    @property
    def client_name(self) -> str:
        return f"{self.client_first_name or ''} {self.client_last_name or ''}".strip()

    @property
    def is_pending(self) -> bool:
        return self.status == AppointmentStatus.pending.value
