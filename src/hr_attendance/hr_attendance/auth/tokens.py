"""Bearer token handling.

Tokens are issued by the identity service of the back office; `issue` exists
for scripts and tests. Claims: `sub` (employee id), `tenant_code`, `role`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..core.enums import ADMIN_ROLES, Role
from ..core.exceptions import AuthenticationError, ValidationError


@dataclass(frozen=True)
class Identity:
    employee_id: int
    tenant_code: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


class TokenService:
    def __init__(self, secret: str, *, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=12)):
        if not secret:
            raise ValidationError("JWT secret is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, employee_id: int, tenant_code: str, role: Role = Role.EMPLOYEE) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(employee_id),
            "tenant_code": tenant_code,
            "role": Role(role).value,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        tenant_code = payload.get("tenant_code")
        if not tenant_code:
            raise ValidationError("Token has no company code")
        try:
            return Identity(
                employee_id=int(payload["sub"]),
                tenant_code=str(tenant_code),
                role=Role(payload.get("role", Role.EMPLOYEE.value)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid token claims") from exc
