"""FastAPI dependencies for the recipe book.

Provides:
- Database session dependency (re-exported from ``db``)
- Translator and image store singletons
- Admin gate for the admin pages (HTTP Basic against configured credentials)
"""

import secrets
import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .db import get_db  # noqa: F401
from .core.translator_client import get_translator  # noqa: F401
from .services.storage import get_image_store  # noqa: F401
from .settings import settings

logger = logging.getLogger("recipebook.admin")

basic_auth = HTTPBasic(auto_error=False)


def require_admin(credentials: HTTPBasicCredentials | None = Depends(basic_auth)) -> str:
    """Resolve the admin user or refuse the request.

    - No ADMIN_PASSWORD configured -> 403 (admin pages disabled)
    - Missing or wrong credentials -> 401 with a Basic challenge
    """
    if not settings.admin_password:
        raise HTTPException(
            status_code=403,
            detail={"error": "admin_disabled", "message": "Admin pages are disabled"},
        )

    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode("utf-8"), settings.admin_username.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode("utf-8"), settings.admin_password.encode("utf-8")
        )
        if user_ok and password_ok:
            return credentials.username
        logger.warning(f"Rejected admin login for '{credentials.username}'")

    raise HTTPException(
        status_code=401,
        detail={"error": "unauthorized", "message": "Admin credentials required"},
        headers={"WWW-Authenticate": "Basic"},
    )
