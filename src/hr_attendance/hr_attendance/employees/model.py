from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the attendance subsystem.

    Note: Read-only here; employee CRUD lives outside this package.
    """

    employee_id: int
    tenant_code: str
    full_name: str
    email: Optional[str]
    role: Role = Role.EMPLOYEE
    is_active: bool = True

    def summary(self) -> dict:
        return {"id": self.employee_id, "name": self.full_name, "email": self.email}
