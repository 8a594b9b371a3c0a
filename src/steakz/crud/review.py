from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.models import Comment


async def get_reviews(db: AsyncSession, approved: bool) -> List[Comment]:
    """
    Отзывы по статусу модерации, новые первыми.
    """
    stmt = (
        select(Comment)
        .where(Comment.approved == approved)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_review(db: AsyncSession, review_id: int) -> Optional[Comment]:
    return await db.get(Comment, review_id)


async def create_review(db: AsyncSession, content: str, user_name: str, stars: int) -> Comment:
    review = Comment(content=content, user_name=user_name, stars=stars, approved=False)
    db.add(review)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(review)
    return review


async def approve_review(db: AsyncSession, review: Comment) -> Comment:
    review.approved = True
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return review


async def delete_review(db: AsyncSession, review: Comment) -> None:
    await db.delete(review)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
