from typing import Type

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import ValidationError
from ..limiter import auth_limit, limiter
from ..models import User
from ..models.account import AccountMixin
from ..schemas import AccountOut, LoginIn, LoginOut, MessageOut, RegisterIn
from ..security import Identity, Role, TokenService, get_token_service
from ..services.accounts import authenticate, register_account

router = APIRouter(prefix="/api", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


def register_response(db: Session, model: Type[AccountMixin], payload: RegisterIn) -> dict:
    register_account(db, model, username=payload.username.strip(), email=payload.email, password=payload.password)
    return {"message": f"{model.__name__} registered successfully"}


def login_response(db: Session, tokens: TokenService, model: Type[AccountMixin], role: Role, payload: LoginIn) -> LoginOut:
    account = authenticate(db, model, payload.email.strip(), payload.password)
    if not account:
        # Same answer for unknown email and wrong password
        raise ValidationError(INVALID_CREDENTIALS)
    token = tokens.issue(Identity(id=account.id, email=account.email, role=role))
    return LoginOut(token=token, user=AccountOut.model_validate(account))


@router.post("/register", response_model=MessageOut, status_code=201)
@limiter.limit(auth_limit)
def register(request: Request, payload: RegisterIn, db: Session = Depends(get_db)):
    return register_response(db, User, payload)


@router.post("/login", response_model=LoginOut)
@limiter.limit(auth_limit)
def login(request: Request, payload: LoginIn, db: Session = Depends(get_db), tokens: TokenService = Depends(get_token_service)):
    return login_response(db, tokens, User, Role.USER, payload)


@router.post("/logout", response_model=MessageOut)
def logout():
    # Tokens are stateless; the client discards its copy
    return {"message": "Logged out successfully"}
