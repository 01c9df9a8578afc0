from __future__ import annotations

from datetime import date, time

from tuturno.domain.entities.appointment import Appointment


SECRET = "test-secret-key-12345"


def make_appointment(appointment_id: str = "appt-1", status: str = "pending") -> Appointment:
    return Appointment(
        id=appointment_id,
        status=status,
        business_id="biz-1",
        business_name="Barbería Central",
        appointment_date=date(2026, 11, 3),
        start_time=time(9, 30),
        client_email="cliente@example.com",
        client_first_name="Ana",
        client_last_name="Pérez",
        service_name="Corte clásico",
        service_price=12.5,
    )
