from datetime import date

from pydantic import BaseModel, Field


class RespondRequestSchema(BaseModel):
    action: str | None = None
    token: str | None = None


class RespondResponseSchema(BaseModel):
    success: bool = True
    message: str
    redirect_url: str


class RescheduleRequestSchema(BaseModel):
    appointment_id: str = Field(min_length=1)
    closed_date: date


class RescheduleResponseSchema(BaseModel):
    success: bool = True
    message: str


class ServiceSchema(BaseModel):
    id: str
    name: str
    price: float = 0.0
    duration_minutes: int = 0
    description: str | None = None
    is_active: bool = True


class EmployeeSchema(BaseModel):
    id: str
    first_name: str
    last_name: str
    position: str | None = None
    avatar_url: str | None = None


class SelectionSchema(BaseModel):
    service_id: str
    employee_id: str | None = None


class CompatibilityRequestSchema(BaseModel):
    services: list[ServiceSchema] = Field(default_factory=list)
    selections: list[SelectionSchema] = Field(default_factory=list)


class PairSchema(BaseModel):
    service: ServiceSchema
    employee: EmployeeSchema | None = None
    candidate_employees: list[EmployeeSchema] = Field(default_factory=list)
    is_selected: bool
    is_compatible: bool
    reason: str | None = None


class CompatibilityResponseSchema(BaseModel):
    pairs: list[PairSchema]
    can_proceed: bool
    common_employees: list[EmployeeSchema] = Field(default_factory=list)
