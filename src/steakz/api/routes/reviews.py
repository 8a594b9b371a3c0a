from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.core.deps import require_roles
from steakz.core.errors import NotFoundError, storage_errors
from steakz.crud import review as crud
from steakz.db.session import get_async_session
from steakz.models import User
from steakz.schemas.review import ReviewAdminRead, ReviewCreate, ReviewRead
from steakz.schemas.user import Message


router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("", response_model=List[ReviewRead])
async def list_approved_reviews(db: AsyncSession = Depends(get_async_session)):
    """
    Публичный список одобренных отзывов, новые первыми.
    """
    with storage_errors("Could not fetch reviews"):
        return await crud.get_reviews(db, approved=True)


@router.post("", response_model=ReviewAdminRead, status_code=status.HTTP_201_CREATED)
async def submit_review(body: ReviewCreate, db: AsyncSession = Depends(get_async_session)):
    """
    Новый отзыв попадает на модерацию (approved = false).
    """
    with storage_errors("Could not save review"):
        return await crud.create_review(db, body.content, body.user_name, body.stars)


@router.get("/pending", response_model=List[ReviewAdminRead])
async def list_pending_reviews(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reviews:moderate")),
):
    with storage_errors("Could not fetch reviews"):
        return await crud.get_reviews(db, approved=False)


@router.patch("/{review_id}/approve", response_model=Message)
async def approve_review(
    review_id: int = Path(..., description="ID отзыва"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reviews:moderate")),
):
    with storage_errors("Could not approve review"):
        review = await crud.get_review(db, review_id)
        if review is None:
            raise NotFoundError("Review not found")
        await crud.approve_review(db, review)
    return {"message": "Review approved"}


@router.delete("/{review_id}", response_model=Message)
async def delete_review(
    review_id: int = Path(..., description="ID отзыва"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reviews:moderate")),
):
    with storage_errors("Could not delete review"):
        review = await crud.get_review(db, review_id)
        if review is None:
            raise NotFoundError("Review not found")
        await crud.delete_review(db, review)
    return {"message": "Review deleted"}
