"""
Base classes for request/response DTOs.

The HTTP API speaks camelCase JSON (``toteQuantity``, ``availableTotes``)
while documents are stored snake_case. CamelModel maps between the two;
populate_by_name lets Python code construct DTOs with snake_case names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class DocResponse(CamelModel):
    """Response DTO built from a MongoBaseModel document."""

    @classmethod
    def from_doc(cls, doc: Any, **extra: Any):
        data = doc.model_dump(mode="json")
        data.update(extra)
        return cls.model_validate(data)
