from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Tenant


class TenantRepository(Protocol):
    def get(self, tenant_code: str) -> Optional[Tenant]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Tenant]:
        raise NotImplementedError
