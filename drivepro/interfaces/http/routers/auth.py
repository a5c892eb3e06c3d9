from fastapi import APIRouter, Depends, Request

from ....config import settings
from ....domain.entities import User
from ....domain.errors import DomainError
from ....application.use_cases.login import Login
from ....infrastructure.metrics import login_attempts_total
from ....infrastructure.ratelimit import limiter
from ....infrastructure.repositories import InMemoryStore, get_store
from ....infrastructure.security import create_access_token
from ..authz import get_current_user
from ..schemas import LoginReq, LoginResp, UserOut, public_user

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResp)
@router.post("/auth/login", response_model=LoginResp)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    payload: LoginReq | None = None,
    store: InMemoryStore = Depends(get_store),
):
    payload = payload or LoginReq()
    uc = Login(store=store, issue_token=create_access_token)
    try:
        result = uc.execute(payload.email, payload.password, payload.user_type)
    except DomainError:
        login_attempts_total.labels(outcome="rejected").inc()
        raise
    login_attempts_total.labels(outcome="success").inc()
    with store.atomic():
        return LoginResp(token=result.token, user=public_user(result.user))


@router.get("/profile", response_model=UserOut)
def profile(user: User = Depends(get_current_user), store: InMemoryStore = Depends(get_store)):
    with store.atomic():
        return public_user(user)
