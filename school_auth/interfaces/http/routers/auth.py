from fastapi import APIRouter, Depends, Request, Response

from ....application.dto import RegisterUserInput, UpdateDetailsInput, UpdatePasswordInput
from ....application.tokens import SessionTokenIssuer
from ....application.use_cases.login_user import LoginUser
from ....application.use_cases.register_user import RegisterUser
from ....application.use_cases.update_details import UpdateUserDetails
from ....application.use_cases.update_password import UpdateUserPassword
from ....config import Settings, get_settings
from ....domain.entities import User
from ....domain.errors import AuthenticationError
from ....infrastructure.metrics import auth_events_total
from ....infrastructure.rate_limit import limiter, login_limit, register_limit
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher
from ..authz import protect
from ..deps import get_password_hasher, get_token_issuer, get_user_repository
from ..responses import clear_token_cookie, send_token_response, user_envelope
from ..schemas import Envelope, LoginReq, RegisterReq, UpdateDetailsReq, UpdatePasswordReq

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=Envelope, response_model_exclude_none=True)
@limiter.limit(register_limit)
def register(
    request: Request,
    response: Response,
    payload: RegisterReq,
    repo: UserRepository = Depends(get_user_repository),
    tokens: SessionTokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
):
    uc = RegisterUser(repo=repo, tokens=tokens)
    token = uc.execute(
        RegisterUserInput(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            tenant_id=payload.tenant_id,
            role=payload.role,
        )
    )
    auth_events_total.labels(event="register", outcome="success").inc()
    return send_token_response(response, token, settings)


@router.post("/login", response_model=Envelope, response_model_exclude_none=True)
@limiter.limit(login_limit)
def login(
    request: Request,
    response: Response,
    payload: LoginReq,
    repo: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: SessionTokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
):
    try:
        token = LoginUser(repo=repo, hasher=hasher, tokens=tokens).execute(payload.email, payload.password)
    except AuthenticationError:
        auth_events_total.labels(event="login", outcome="failure").inc()
        raise
    auth_events_total.labels(event="login", outcome="success").inc()
    return send_token_response(response, token, settings)


@router.get("/logout", response_model=Envelope, response_model_exclude_none=True)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_token_cookie(response, settings)
    return Envelope(success=True, data={})


@router.get("/me", response_model=Envelope, response_model_exclude_none=True)
def me(user: User = Depends(protect)):
    return user_envelope(user)


@router.put("/updatedetails", response_model=Envelope, response_model_exclude_none=True)
def update_details(
    payload: UpdateDetailsReq,
    user: User = Depends(protect),
    repo: UserRepository = Depends(get_user_repository),
):
    updated = UpdateUserDetails(repo=repo).execute(
        user.id, UpdateDetailsInput(name=payload.name, email=payload.email)
    )
    return user_envelope(updated)


@router.put("/updatepassword", response_model=Envelope, response_model_exclude_none=True)
def update_password(
    response: Response,
    payload: UpdatePasswordReq,
    user: User = Depends(protect),
    repo: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: SessionTokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
):
    uc = UpdateUserPassword(repo=repo, hasher=hasher, tokens=tokens)
    try:
        token = uc.execute(
            user.id,
            UpdatePasswordInput(current_password=payload.current_password, new_password=payload.new_password),
        )
    except AuthenticationError:
        auth_events_total.labels(event="update_password", outcome="failure").inc()
        raise
    auth_events_total.labels(event="update_password", outcome="success").inc()
    return send_token_response(response, token, settings)
