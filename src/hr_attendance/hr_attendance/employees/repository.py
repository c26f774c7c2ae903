from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self, tenant_code: str) -> Sequence[Employee]:
        raise NotImplementedError
