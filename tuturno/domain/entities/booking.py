from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    price: float = 0.0
    duration_minutes: int = 0
    description: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class Employee:
    id: str
    first_name: str
    last_name: str
    position: str | None = None
    avatar_url: str | None = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ServiceEmployeePair:
    """A bookable service, the employees able to perform it and the current choice."""

    service: Service
    employee: Employee | None = None
    candidate_employees: tuple[Employee, ...] = field(default_factory=tuple)
    is_selected: bool = False
    is_compatible: bool = True
    reason: str | None = None

    @property
    def candidate_ids(self) -> set[str]:
        return {e.id for e in self.candidate_employees}
