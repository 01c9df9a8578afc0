from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from tuturno.api.schemas import (
    CompatibilityRequestSchema,
    CompatibilityResponseSchema,
    EmployeeSchema,
    PairSchema,
    ServiceSchema,
)
from tuturno.application.use_cases.service_employee_selection import ServiceEmployeeSelection
from tuturno.domain.entities.booking import Employee, Service, ServiceEmployeePair
from tuturno.wiring.dependencies import get_service_employee_selection


router = APIRouter()


def _employee_schema(employee: Employee) -> EmployeeSchema:
    return EmployeeSchema(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        position=employee.position,
        avatar_url=employee.avatar_url,
    )


def _pair_schema(pair: ServiceEmployeePair) -> PairSchema:
    return PairSchema(
        service=ServiceSchema(**asdict(pair.service)),
        employee=_employee_schema(pair.employee) if pair.employee else None,
        candidate_employees=[_employee_schema(e) for e in pair.candidate_employees],
        is_selected=pair.is_selected,
        is_compatible=pair.is_compatible,
        reason=pair.reason,
    )


@router.post("/booking/compatibility", response_model=CompatibilityResponseSchema)
async def compatibility(
    req: CompatibilityRequestSchema,
    selection: ServiceEmployeeSelection = Depends(get_service_employee_selection),
):
    catalog = [Service(**s.model_dump()) for s in req.services]
    await selection.initialize(catalog)

    known = {s.id for s in catalog}
    for step in req.selections:
        if step.service_id not in known:
            raise HTTPException(status_code=400, detail=f"Unknown service: {step.service_id}")

        pairs = selection.toggle_service(step.service_id)
        if not step.employee_id:
            continue

        pair = next(p for p in pairs if p.service.id == step.service_id)
        employee = next((e for e in pair.candidate_employees if e.id == step.employee_id), None)
        if employee is None:
            raise HTTPException(
                status_code=400,
                detail=f"Employee {step.employee_id} cannot perform service {step.service_id}",
            )
        selection.assign_employee(step.service_id, employee)

    return CompatibilityResponseSchema(
        pairs=[_pair_schema(p) for p in selection.pairs],
        can_proceed=selection.can_proceed(),
        common_employees=[_employee_schema(e) for e in selection.common_employees()],
    )
