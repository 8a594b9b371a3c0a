from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Схемы API отдают и принимают ключи в camelCase (userId, isPaid, ...)."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
