from fastapi import APIRouter, Depends, Query, Response, status

from ....config import settings
from ....application.dto import NewUserInput, UserChanges
from ....application.use_cases.manage_users import ListUsers, CreateUser, UpdateUser, DeleteUser
from ....infrastructure.repositories import InMemoryStore, get_store
from ..authz import require_admin
from ..schemas import UserCreate, UserUpdate, UserOut, public_user

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[UserOut])
def list_users(role: str | None = Query(None), store: InMemoryStore = Depends(get_store)):
    with store.atomic():
        return [public_user(u) for u in ListUsers(store).execute(role)]


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate | None = None, store: InMemoryStore = Depends(get_store)):
    payload = payload or UserCreate()
    uc = CreateUser(store, default_password=settings.DEFAULT_USER_PASSWORD)
    data = NewUserInput(
        name=payload.name,
        email=payload.email,
        role=payload.role,
        password=payload.password,
        is_active=payload.is_active,
    )
    with store.atomic():
        return public_user(uc.execute(data))


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: str, payload: UserUpdate | None = None, store: InMemoryStore = Depends(get_store)):
    payload = payload or UserUpdate()
    changes = UserChanges(
        name=payload.name,
        email=payload.email,
        role=payload.role,
        is_active=payload.is_active,
    )
    with store.atomic():
        return public_user(UpdateUser(store).execute(user_id, changes))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, store: InMemoryStore = Depends(get_store)):
    DeleteUser(store).execute(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
