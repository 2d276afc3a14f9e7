from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Speaks camelCase on the wire and accepts snake_case too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
