import logging

from fastapi import APIRouter

from steakz.core.errors import BadRequestError
from steakz.schemas.review import ContactMessage
from steakz.schemas.user import Message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=Message)
async def send_contact_message(body: ContactMessage):
    """
    Сообщение с формы обратной связи. Пока только пишется в лог.
    """
    if not body.message:
        raise BadRequestError("Message is required")
    logger.info(f"Contact form submitted: name={body.name!r} email={body.email!r} message={body.message!r}")
    return {"message": "Message received!"}
