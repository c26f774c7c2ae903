from __future__ import annotations

from typing import Optional, Protocol

from .model import ShiftSchedule


class ShiftScheduleRepository(Protocol):
    def get_for_tenant(self, tenant_code: str) -> Optional[ShiftSchedule]:
        """Stored schedule of a tenant, or None when the tenant uses the defaults."""

        raise NotImplementedError


def resolve_shift(repo: ShiftScheduleRepository, tenant_code: str) -> ShiftSchedule:
    return repo.get_for_tenant(tenant_code) or ShiftSchedule.default(tenant_code)
