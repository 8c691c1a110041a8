"""HiddenHeu Backend — Shared schema base class."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Base for every request/response schema.

    Python side uses snake_case; JSON side uses camelCase. FastAPI serializes
    response models by alias, so `review_count` goes out as `reviewCount`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
