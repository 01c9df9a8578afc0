from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Iterable, Sequence

from tuturno.application.ports.employee_directory import EmployeeDirectoryPort
from tuturno.domain.entities.booking import Employee, Service, ServiceEmployeePair


logger = logging.getLogger(__name__)


def build_pair(service: Service, candidates: Iterable[Employee]) -> ServiceEmployeePair:
    return ServiceEmployeePair(
        service=service,
        employee=None,
        candidate_employees=tuple(candidates),
        is_selected=False,
        is_compatible=True,
        reason=None,
    )


def toggle_service(pairs: Sequence[ServiceEmployeePair], service_id: str) -> list[ServiceEmployeePair]:
    """
    Flip the selection of one service.

    Deselecting always clears the bound employee. Selecting binds the only
    candidate when there is exactly one and the pair is currently compatible.
    """
    result: list[ServiceEmployeePair] = []
    for pair in pairs:
        if pair.service.id != service_id:
            result.append(pair)
            continue

        if pair.is_selected:
            result.append(replace(pair, is_selected=False, employee=None))
            continue

        employee = pair.employee
        if employee is None and len(pair.candidate_employees) == 1 and pair.is_compatible:
            employee = pair.candidate_employees[0]
        result.append(replace(pair, is_selected=True, employee=employee))
    return result


def assign_employee(
    pairs: Sequence[ServiceEmployeePair],
    service_id: str,
    employee: Employee,
) -> list[ServiceEmployeePair]:
    # Membership in candidate_employees is the caller's responsibility.
    return [replace(p, employee=employee) if p.service.id == service_id else p for p in pairs]


def recompute_compatibility(pairs: Sequence[ServiceEmployeePair]) -> list[ServiceEmployeePair]:
    """
    Mark which unselected services can still join the booking.

    A service is compatible when one of its candidates is already bound to a
    selected service. With no employee bound yet every service is compatible.
    Selected services always stay compatible. This is a greedy check on the
    bound employees, not a full assignment solver.
    """
    chosen = [p for p in pairs if p.is_selected]
    bound_ids = {p.employee.id for p in chosen if p.employee is not None}

    result: list[ServiceEmployeePair] = []
    for pair in pairs:
        if pair.is_selected or not bound_ids or pair.candidate_ids & bound_ids:
            result.append(replace(pair, is_compatible=True, reason=None))
            continue

        names = ", ".join(p.service.name for p in chosen)
        result.append(
            replace(
                pair,
                is_compatible=False,
                reason=f'This service needs a different employee. Deselect "{names}" to add it.',
            )
        )
    return result


def selected_pairs(pairs: Sequence[ServiceEmployeePair]) -> list[ServiceEmployeePair]:
    return [p for p in pairs if p.is_selected and p.employee is not None]


def can_proceed(pairs: Sequence[ServiceEmployeePair]) -> bool:
    chosen = [p for p in pairs if p.is_selected]
    return bool(chosen) and all(p.employee is not None for p in chosen)


def common_employees(pairs: Sequence[ServiceEmployeePair]) -> list[Employee]:
    """Employees eligible for every selected service, in the first service's order."""
    chosen = [p for p in pairs if p.is_selected]
    if not chosen:
        return []
    shared = set.intersection(*(p.candidate_ids for p in chosen))
    return [e for e in chosen[0].candidate_employees if e.id in shared]


class ServiceEmployeeSelection:
    """Owns the pair list for one booking session and keeps compatibility current."""

    def __init__(self, directory: EmployeeDirectoryPort) -> None:
        self._directory = directory
        self._pairs: list[ServiceEmployeePair] = []
        self._logger = logging.getLogger(__name__)

    @property
    def pairs(self) -> list[ServiceEmployeePair]:
        return list(self._pairs)

    async def initialize(self, catalog: Sequence[Service]) -> list[ServiceEmployeePair]:
        candidates = await asyncio.gather(*(self._lookup(service) for service in catalog))
        self._pairs = [build_pair(service, employees) for service, employees in zip(catalog, candidates)]
        return self.pairs

    async def _lookup(self, service: Service) -> list[Employee]:
        try:
            return await self._directory.get_employees_for_service(service.id)
        except Exception as e:
            self._logger.warning(
                "Employee lookup failed; treating service as having no employees",
                extra={"service_id": service.id, "error": str(e)},
            )
            return []

    def toggle_service(self, service_id: str) -> list[ServiceEmployeePair]:
        self._pairs = recompute_compatibility(toggle_service(self._pairs, service_id))
        return self.pairs

    def assign_employee(self, service_id: str, employee: Employee) -> list[ServiceEmployeePair]:
        self._pairs = recompute_compatibility(assign_employee(self._pairs, service_id, employee))
        return self.pairs

    def get_selected_pairs(self) -> list[ServiceEmployeePair]:
        return selected_pairs(self._pairs)

    def can_proceed(self) -> bool:
        return can_proceed(self._pairs)

    def common_employees(self) -> list[Employee]:
        return common_employees(self._pairs)
