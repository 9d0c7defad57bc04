"""
Shared pydantic base for API-facing models.

Serialises with camelCase aliases (``bookId``, ``suggestedPrice``) to match the
storefront client, while still accepting snake_case field names on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoreModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
