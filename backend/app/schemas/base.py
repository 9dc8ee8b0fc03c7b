"""
Shared Pydantic base for API schemas.

The wire format uses camelCase keys (``airwayBill``, ``paymentStatus``);
Python code uses snake_case field names.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    """Identity reference resolved for display."""
    id: int
    name: str
    email: Optional[str] = None
