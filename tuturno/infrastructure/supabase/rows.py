"""Normalize PostgREST rows into domain entities right after the network call."""

from __future__ import annotations

from datetime import date, time
from typing import Any

from tuturno.domain.entities.appointment import Appointment
from tuturno.domain.entities.booking import Employee


def first_embedded(value: Any) -> dict[str, Any] | None:
    """An embedded relation comes back as an object or as a list depending on the foreign key."""
    if isinstance(value, list):
        return value[0] if value else None
    if isinstance(value, dict):
        return value
    return None


def _parse_date(value: Any) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _parse_time(value: Any) -> time | None:
    if not value:
        return None
    try:
        return time.fromisoformat(str(value)[:8])
    except ValueError:
        return None


def normalize_employee_rows(rows: list[dict[str, Any]] | None) -> list[Employee]:
    employees: list[Employee] = []
    for row in rows or []:
        data = first_embedded(row.get("employees"))
        if not data or not data.get("is_active", True) or not data.get("id"):
            continue
        employees.append(
            Employee(
                id=str(data["id"]),
                first_name=data.get("first_name") or "",
                last_name=data.get("last_name") or "",
                position=data.get("position"),
                avatar_url=data.get("avatar_url"),
                is_active=True,
            )
        )
    return employees


def normalize_appointment_row(row: dict[str, Any]) -> Appointment:
    business = first_embedded(row.get("business")) or {}
    user = first_embedded(row.get("users")) or {}
    line = first_embedded(row.get("appointment_services")) or {}
    service = first_embedded(line.get("service")) or {}

    price = line.get("price")
    return Appointment(
        id=str(row["id"]),
        status=str(row.get("status") or ""),
        business_id=business.get("id") or row.get("business_id"),
        business_name=business.get("name"),
        appointment_date=_parse_date(row.get("appointment_date")),
        start_time=_parse_time(row.get("start_time")),
        client_email=user.get("email"),
        client_first_name=user.get("first_name"),
        client_last_name=user.get("last_name"),
        service_name=service.get("name"),
        service_price=float(price) if price is not None else None,
    )
