"""Endpoints for signup, login, logout and password changes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.sessions import create_session, invalidate_session
from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    change_password,
    confirm_verification_code,
    issue_verification_code,
    register_user,
)
from app.config import get_settings
from app.domain.entities import User, UserSession
from app.infrastructure.database import get_db
from app.infrastructure.rate_limit import (
    get_client_ip,
    login_rate_limiter,
    signup_rate_limiter,
    verification_key,
    verification_rate_limiter,
)
from app.infrastructure.security_events import SecurityEventType, log_security_event
from app.interfaces.api.cookies import clear_session_cookies, issue_session_cookies
from app.interfaces.api.dependencies import get_current_session, get_current_user, require_csrf
from app.interfaces.api.routes_helpers import raise_rate_limited, record_failed_attempt
from app.interfaces.api.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    SessionRead,
    SignupRequest,
    SignupResponse,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

_VERIFICATION_ERRORS = {
    AuthenticationStatus.VERIFICATION_NOT_FOUND: "No verification code found. Please sign up again.",
    AuthenticationStatus.VERIFICATION_EXPIRED: "Verification code expired. Please sign up again.",
    AuthenticationStatus.INVALID_VERIFICATION_CODE: "Invalid verification code",
}


def _start_session(db: Session, response: Response, user: User) -> SessionRead:
    token, user_session = create_session(db, user.id)
    issue_session_cookies(response, token, user_session)
    return SessionRead(user=UserRead.from_entity(user), csrf_token=user_session.csrf_token)


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> SignupResponse:
    """Register an account and sign it in, or email a code when verification is on."""

    settings = get_settings()
    client_ip = get_client_ip(request)

    if signup_rate_limiter.is_rate_limited(client_ip):
        raise_rate_limited(signup_rate_limiter, client_ip, "signup")

    if not settings.allow_registration:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Registration is currently disabled",
        )

    try:
        user = register_user(
            db,
            email=payload.email,
            password=payload.password,
            email_verified=not settings.email_verification_required,
        )
    except ValueError as exc:
        record_failed_attempt(
            signup_rate_limiter,
            client_ip,
            client_ip,
            SecurityEventType.SIGNUP_RATE_LIMITED,
            email=payload.email,
        )
        log_security_event(
            SecurityEventType.SIGNUP_FAILED, client_ip, email=payload.email, message=str(exc)
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    log_security_event(
        SecurityEventType.SIGNUP_SUCCESS, client_ip, email=user.email, user_id=user.id
    )
    signup_rate_limiter.reset(client_ip)

    if settings.email_verification_required:
        issue_verification_code(db, user)
        return SignupResponse(user_id=user.id, requires_verification=True)

    _start_session(db, response, user)
    return SignupResponse(user_id=user.id, requires_verification=False)


@router.post("/login", response_model=SessionRead)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> SessionRead:
    """Authenticate by email and password and issue the session cookies."""

    settings = get_settings()
    client_ip = get_client_ip(request)

    if login_rate_limiter.is_rate_limited(client_ip):
        raise_rate_limited(login_rate_limiter, client_ip, "login")

    user, auth_status = authenticate_user(
        db,
        payload.email,
        payload.password,
        require_verified_email=settings.email_verification_required,
    )

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        record_failed_attempt(
            login_rate_limiter,
            client_ip,
            client_ip,
            SecurityEventType.LOGIN_RATE_LIMITED,
            email=payload.email,
        )
        log_security_event(
            SecurityEventType.LOGIN_FAILED,
            client_ip,
            email=payload.email,
            user_id=user.id if user else None,
            message="Invalid password" if user else "User not found",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=_INVALID_CREDENTIALS_MESSAGE
        )

    if auth_status is AuthenticationStatus.VERIFICATION_REQUIRED:
        _verify_email(db, user, payload.verification_code, client_ip)

    login_rate_limiter.reset(client_ip)
    log_security_event(
        SecurityEventType.LOGIN_SUCCESS, client_ip, email=user.email, user_id=user.id
    )
    return _start_session(db, response, user)


def _verify_email(db: Session, user: User, code: str | None, client_ip: str) -> None:
    if not code:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email verification required. Please enter your verification code.",
        )

    key = verification_key(client_ip, user.id)
    if verification_rate_limiter.is_rate_limited(key):
        raise_rate_limited(verification_rate_limiter, key, "verification")

    result = confirm_verification_code(db, user.id, code)
    if result is AuthenticationStatus.SUCCESS:
        verification_rate_limiter.reset(key)
        user.email_verified = True
        return

    record_failed_attempt(
        verification_rate_limiter,
        key,
        client_ip,
        SecurityEventType.VERIFICATION_RATE_LIMITED,
        email=user.email,
        user_id=user.id,
    )
    if result is AuthenticationStatus.INVALID_VERIFICATION_CODE:
        log_security_event(
            SecurityEventType.VERIFICATION_FAILED,
            client_ip,
            email=user.email,
            user_id=user.id,
            message="Invalid verification code",
        )
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_VERIFICATION_ERRORS[result])


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    response: Response,
    user_session: UserSession = Depends(require_csrf),
    db: Session = Depends(get_db),
) -> None:
    invalidate_session(db, user_session.id)
    clear_session_cookies(response)


@router.get("/session", response_model=SessionRead)
def read_session(
    current_user: User = Depends(get_current_user),
    user_session: UserSession = Depends(get_current_session),
) -> SessionRead:
    """Return the signed-in user and the CSRF token to echo on writes."""

    return SessionRead(user=UserRead.from_entity(current_user), csrf_token=user_session.csrf_token)


@router.post("/password", response_model=SessionRead)
def update_password(
    payload: ChangePasswordRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    _: UserSession = Depends(require_csrf),
    db: Session = Depends(get_db),
) -> SessionRead:
    """Change the password, sign out every other device and keep this one signed in."""

    try:
        token, user_session = change_password(
            db,
            user_id=current_user.id,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Password changed for user %s", current_user.id)
    issue_session_cookies(response, token, user_session)
    return SessionRead(user=UserRead.from_entity(current_user), csrf_token=user_session.csrf_token)
