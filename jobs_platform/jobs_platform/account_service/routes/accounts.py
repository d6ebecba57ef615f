"""
Account routes - signup, login and the token-protected dashboard.
"""
from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.orm import Session
from typing import Optional

from ..db import get_db
from ..errors import ForbiddenError, InvalidCredentialsError
from ..schemas import (
    DashboardResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SessionClaims,
    SignupRequest,
)
from ..service import AccountService
from ..utils.event_logger import log_account_event

router = APIRouter(tags=["accounts"])


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_current_claims(
    service: AccountService = Depends(get_account_service),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> SessionClaims:
    return service.verify(authorization)


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: AccountService = Depends(get_account_service),
):
    user = service.signup(db, payload)
    log_account_event("signup", user.email, request, db, user_id=user.id)
    return MessageResponse(message="Account created successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: AccountService = Depends(get_account_service),
):
    try:
        result = service.login(db, payload)
    except ForbiddenError:
        log_account_event("login_forbidden", payload.email, request, db)
        raise
    except InvalidCredentialsError:
        log_account_event("login_failure", payload.email, request, db)
        raise

    log_account_event("login_success", payload.email, request, db, user_id=result.claims.user_id)
    return LoginResponse(message="Login successful", token=result.token)


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(claims: SessionClaims = Depends(get_current_claims)):
    return DashboardResponse(message="Welcome to the dashboard", user=claims)
