"""Schema base classes and small shared response bodies."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; readable straight from ORM rows."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        from_attributes=True,
    )


class HealthResponse(BaseModel):
    status: str = "ok"
    app: str
    env: str
    database: str


class SuccessOut(CamelModel):
    success: bool = True
