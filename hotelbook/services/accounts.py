import logging
from typing import Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..errors import ConflictError
from ..models import Admin
from ..models.account import AccountMixin
from ..security import hash_password, verify_password

logger = logging.getLogger(__name__)


def _kind(model: Type[AccountMixin]) -> str:
    return model.__name__


def register_account(db: Session, model: Type[AccountMixin], username: str, email: str, password: str) -> AccountMixin:
    """Create a user or admin account, rejecting duplicate emails and usernames."""
    kind = _kind(model)
    if db.query(model).filter(model.email == email).first():
        raise ConflictError(f"{kind} with this email already exists")
    if db.query(model).filter(model.username == username).first():
        raise ConflictError(f"{kind} with this username already exists")

    account = model(username=username, email=email, hashed_password=hash_password(password))
    db.add(account)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email or username
        db.rollback()
        raise ConflictError(f"{kind} with this email already exists")
    db.refresh(account)
    logger.info("%s registered: id=%s email=%s", kind, account.id, account.email)
    return account


def authenticate(db: Session, model: Type[AccountMixin], email: str, password: str) -> Optional[AccountMixin]:
    """Return the account when the credentials match, otherwise None.

    Callers must not distinguish an unknown email from a wrong password.
    """
    account = db.query(model).filter(model.email == email).first()
    if not account or not verify_password(password, account.hashed_password):
        logger.warning("Failed %s login for %s", _kind(model).lower(), email)
        return None
    return account


def ensure_default_admin(db: Session, settings: Settings) -> Optional[Admin]:
    email = settings.ADMIN_EMAIL
    password = settings.ADMIN_PASSWORD
    if not email or not password:
        return None
    admin = db.query(Admin).filter(Admin.email == email).first()
    if admin:
        return admin
    admin = Admin(email=email, username=settings.ADMIN_USERNAME or email, hashed_password=hash_password(password))
    db.add(admin)
    db.commit()
    logger.info("Default admin ensured: %s", email)
    return admin
