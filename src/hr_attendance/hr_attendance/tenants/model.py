from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tenant:
    """Domain entity: an organisation (company) identified by its tenant code."""

    tenant_code: str
    name: str
    is_active: bool = True
