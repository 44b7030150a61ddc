"""
Pydantic schemas for API request validation.

Requests are validated here and converted into the engine's dataclass
models before any parsing happens.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import CrowdAlias, SpecField
from ..utils.validators import is_valid_url


class SpecFieldSchema(BaseModel):
    """One field of a category schema."""
    name: str = Field(..., min_length=1, description="Canonical field name")
    required: bool = Field(default=False, description="Whether the field is mandatory")

    model_config = ConfigDict(extra="allow")


class CrowdAliasSchema(BaseModel):
    """A crowd-learned alias supplied by the caller."""
    source_key: str = Field(..., min_length=1, description="Label as users pasted it")
    target_field: str = Field(
        ...,
        min_length=1,
        validation_alias="spec_name",
        description="Field the label maps to",
    )
    usage_count: int = Field(default=3, ge=0, description="Times users confirmed the mapping")

    model_config = ConfigDict(populate_by_name=True)

    def to_model(self) -> CrowdAlias:
        return CrowdAlias(self.source_key, self.target_field, self.usage_count)


class SchemaRequest(BaseModel):
    """Base for requests that carry a field schema and pasted text."""
    text: str = Field(default="", description="Pasted text or HTML")
    field_schema: Dict[str, List[SpecFieldSchema]] = Field(
        default_factory=dict,
        alias="schema",
        description="Category name -> fields",
    )
    crowd_aliases: Optional[List[CrowdAliasSchema]] = Field(
        default=None,
        description="Aliases to use instead of the configured alias store",
    )
    use_crowd_aliases: bool = Field(default=True, description="Consult the alias store when configured")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('text', mode='before')
    @classmethod
    def coerce_text(cls, v):
        """Missing text parses as empty."""
        return "" if v is None else v

    def to_schema(self) -> Dict[str, List[SpecField]]:
        """Convert to the engine's schema mapping."""
        return {
            category: [SpecField(f.name, f.required) for f in fields]
            for category, fields in self.field_schema.items()
        }

    def supplied_aliases(self) -> Optional[List[CrowdAlias]]:
        if self.crowd_aliases is None:
            return None
        return [a.to_model() for a in self.crowd_aliases]


class ParseRequest(SchemaRequest):
    """Request schema for POST /api/parse."""


class BatchRequest(SchemaRequest):
    """Request schema for POST /api/batch."""


class ApplyRequest(SchemaRequest):
    """Request schema for POST /api/apply."""
    overrides: Dict[str, Any] = Field(
        default_factory=dict,
        description="Field -> chosen value; '_manual_mappings' maps field -> raw value",
    )
    normalize_metric: bool = Field(default=False, description="Convert values to metric units")


class DiffRequest(SchemaRequest):
    """Request schema for POST /api/diff."""
    existing: Dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Field -> value currently stored on the item",
    )


class BoundariesRequest(BaseModel):
    """Request schema for POST /api/boundaries."""
    text: str = Field(default="", description="Text that may describe several products")


class FetchRequest(BaseModel):
    """Request schema for POST /api/fetch."""
    url: str = Field(..., min_length=1, description="Product page URL")
    field_schema: Optional[Dict[str, List[SpecFieldSchema]]] = Field(
        default=None,
        alias="schema",
        description="Parse the fetched text against this schema when given",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_url(v):
            raise ValueError("url must be an absolute http(s) URL")
        return v

    def to_schema(self) -> Optional[Dict[str, List[SpecField]]]:
        if self.field_schema is None:
            return None
        return {
            category: [SpecField(f.name, f.required) for f in fields]
            for category, fields in self.field_schema.items()
        }


class RecordAliasRequest(BaseModel):
    """Request schema for POST /api/aliases."""
    source_key: str = Field(..., min_length=1, description="Label as it appeared in the pasted text")
    spec_name: str = Field(..., min_length=1, description="Field the user mapped it to")
    category: Optional[str] = Field(default=None, description="Item category for context")

    @field_validator('source_key', 'spec_name')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v
