from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.core.deps import get_current_user, require_roles
from steakz.core.errors import storage_errors
from steakz.crud.user import list_users
from steakz.db.session import get_async_session
from steakz.models import User
from steakz.schemas.user import AdminUserCreate, AdminUserUpdate, Message, RoleUpdate, UserMessage, UserOut
from steakz.services import accounts


router = APIRouter(
    prefix="/api/admin/users",
    tags=["admin"],
    dependencies=[Depends(require_roles("admin:users"))],
)


@router.get("", response_model=List[UserOut])
async def admin_list_users(db: AsyncSession = Depends(get_async_session)):
    with storage_errors("Failed to load users"):
        users, _ = await list_users(db)
    return users


@router.post("", response_model=UserMessage, status_code=status.HTTP_201_CREATED)
async def admin_create_user(
    body: AdminUserCreate,
    db: AsyncSession = Depends(get_async_session),
    actor: User = Depends(get_current_user),
):
    """
    Создание пользователя админом. Создатель сохраняется в created_by.
    """
    with storage_errors("Error creating user"):
        user = await accounts.create_account(db, body.username, body.password, body.role, creator=actor)
    return {"message": "User created successfully", "user": user}


@router.patch("/{user_id}", response_model=UserMessage)
async def admin_update_user(
    body: AdminUserUpdate,
    user_id: int = Path(..., description="ID пользователя"),
    db: AsyncSession = Depends(get_async_session),
    actor: User = Depends(get_current_user),
):
    """
    Смена username и/или пароля. Чужих админов менять нельзя.
    """
    with storage_errors("Error updating user"):
        user = await accounts.update_account(db, actor, user_id, body.username, body.password)
    return {"message": "User updated successfully", "user": user}


@router.patch("/{user_id}/role", response_model=UserMessage)
async def admin_change_role(
    body: RoleUpdate,
    user_id: int = Path(..., description="ID пользователя"),
    db: AsyncSession = Depends(get_async_session),
    actor: User = Depends(get_current_user),
):
    with storage_errors("Error changing user role"):
        user = await accounts.change_role(db, actor, user_id, body.role)
    return {"message": f"User role updated to {user.role.value}", "user": user}


@router.delete("/{user_id}", response_model=Message)
async def admin_delete_user(
    user_id: int = Path(..., description="ID пользователя"),
    db: AsyncSession = Depends(get_async_session),
    actor: User = Depends(get_current_user),
):
    with storage_errors("Error deleting user"):
        username = await accounts.delete_account(db, actor, user_id)
    return {"message": f"User {username} and all associated data deleted successfully"}
