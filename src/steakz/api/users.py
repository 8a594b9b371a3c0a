from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.deps import require_roles
from ..core.errors import BadRequestError, storage_errors
from ..crud.user import get_user_by_email, list_users, update_user
from ..db.session import get_async_session
from ..models.user import RoleEnum, User
from ..schemas.user import ProfileUpdate, RoleUpdate, UserMessage, UserOut, UserPage
from ..services import accounts

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserPage)
async def list_users_page(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_async_session),
    actor: User = Depends(require_roles("users:list")),
):
    """
    Постраничный список. USER видит только пользователей с ролью USER.
    """
    role = RoleEnum.USER if actor.role == RoleEnum.USER else None
    with storage_errors("Error fetching users"):
        users, total = await list_users(session, role=role, limit=limit, offset=(page - 1) * limit)
    return {
        "users": users,
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": (total + limit - 1) // limit,
        },
    }


@router.get("/{user_id}", response_model=UserOut)
async def get_user_by_id(
    user_id: int,
    session: AsyncSession = Depends(get_async_session),
    actor: User = Depends(require_roles("users:view")),
):
    with storage_errors("Error fetching user details"):
        return await accounts.view_account(session, actor, user_id)


@router.get("/{user_id}/profile", response_model=UserOut)
async def get_user_profile(
    user_id: int,
    session: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("users:profile")),
):
    with storage_errors("Failed to fetch user profile"):
        return await accounts.get_target(session, user_id)


@router.put("/{user_id}/profile", response_model=UserMessage)
async def update_user_profile(
    user_id: int,
    body: ProfileUpdate,
    session: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("users:profile")),
):
    """
    Обновление email / даты рождения. Передаются только изменяемые поля.
    """
    fields = body.model_dump(exclude_unset=True)
    if not fields:
        raise BadRequestError("No update data provided")

    with storage_errors("Failed to update user profile"):
        target = await accounts.get_target(session, user_id)
        if fields.get("email"):
            owner = await get_user_by_email(session, fields["email"])
            if owner is not None and owner.id != target.id:
                raise BadRequestError("Email already in use")
        user = await update_user(session, target, **fields)
    return {"message": "User profile updated", "user": user}


@router.patch("/{user_id}/role", response_model=UserMessage)
async def update_user_role(
    user_id: int,
    body: RoleUpdate,
    session: AsyncSession = Depends(get_async_session),
    actor: User = Depends(require_roles("users:role")),
):
    with storage_errors("Failed to update user role"):
        user = await accounts.change_role(session, actor, user_id, body.role)
    return {"message": "User role updated", "user": user}
