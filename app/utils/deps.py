from typing import Iterable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.core.database import SessionLocal
from app.schemas.user import Identity
from app.services.auth import authenticator
from app.utils.permission import PermissionHelper as permission_helper

# auto_error is off so a missing header surfaces as Unauthenticated rather than FastAPI's own 403
http_bearer = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_current_identity(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> Identity:
    token = credentials.credentials if credentials else None
    return authenticator.authenticate(db, token)


def require_role(*allowed_roles: RoleEnum):
    """Dependency factory that admits only callers holding one of ``allowed_roles``."""
    allowed: Iterable[RoleEnum] = tuple(allowed_roles)

    def _verify_role(identity: Identity = Depends(get_current_identity)) -> Identity:
        return permission_helper.require_role(identity, allowed)

    return _verify_role
