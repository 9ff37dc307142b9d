"""
Base Pydantic Schemas
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model that reads and writes camelCase field names"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
