from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..limiter import auth_limit, limiter
from ..models import Admin, User
from ..schemas import AccountOut, AdminBookingOut, LoginIn, LoginOut, MessageOut, RegisterIn
from ..security import Identity, Role, TokenService, get_token_service, require_admin
from ..services.booking import list_all_bookings
from .auth import login_response, register_response

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/register", response_model=MessageOut, status_code=201)
@limiter.limit(auth_limit)
def admin_register(request: Request, payload: RegisterIn, db: Session = Depends(get_db)):
    return register_response(db, Admin, payload)


@router.post("/login", response_model=LoginOut)
@limiter.limit(auth_limit)
def admin_login(request: Request, payload: LoginIn, db: Session = Depends(get_db), tokens: TokenService = Depends(get_token_service)):
    return login_response(db, tokens, Admin, Role.ADMIN, payload)


@router.post("/logout", response_model=MessageOut)
def admin_logout():
    return {"message": "Logged out successfully"}


@router.get("/users", response_model=List[AccountOut])
def admin_users(db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
    return db.query(User).order_by(User.id.asc()).all()


@router.get("/bookings", response_model=List[AdminBookingOut])
def admin_bookings(db: Session = Depends(get_db), admin: Identity = Depends(require_admin)):
    return list_all_bookings(db)
