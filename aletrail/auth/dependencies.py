from __future__ import annotations

import hmac

from fastapi import Depends, Header

from ..config import AppConfig, get_config
from ..errors import AleTrailError


class Unauthorized(AleTrailError):
    status_code = 403


def require_admin(
    x_admin_key: str | None = Header(default=None),
    config: AppConfig = Depends(get_config),
) -> None:
    """Raise 403 unless ``x-admin-key`` matches the configured admin key."""
    if not config.admin_key or not x_admin_key:
        raise Unauthorized("Unauthorized")
    if not hmac.compare_digest(x_admin_key, config.admin_key):
        raise Unauthorized("Unauthorized")
