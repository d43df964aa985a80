"""
Response envelopes and the base model shared by all schemas.

The dashboard speaks camelCase JSON, so every schema derives from
``ApiModel`` which generates camelCase aliases while still accepting
the snake_case field names in Python code.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(ApiModel, Generic[T]):
    """``{"success": true, "data": ...}``"""

    success: bool = True
    data: T


class MessageResponse(ApiModel):
    """``{"success": true, "message": ...}``"""

    success: bool = True
    message: str
