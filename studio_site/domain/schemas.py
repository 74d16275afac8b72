from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase"""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelCaseModel(BaseModel):
    """Base model with camelCase alias configuration"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allow both snake_case and camelCase
        use_enum_values=True,
    )


# Contact Schemas
class ContactRequest(CamelCaseModel):
    """
    Documented shape of POST /api/contact.

    The endpoint parses the raw body itself; this model only feeds OpenAPI.
    """

    name: str = Field(..., min_length=2, max_length=80)
    email: str = Field(..., max_length=254)
    message: str = Field(..., min_length=10, max_length=4000)
    company: Optional[str] = Field(default=None, description="Honeypot (legacy); leave empty")
    website: Optional[str] = Field(default=None, description="Honeypot; leave empty")
    form_started_at: Optional[float] = Field(
        default=None, description="Epoch milliseconds when the form was rendered"
    )


class ContactSuccessResponse(BaseModel):
    ok: bool = True
    debug: Optional[Dict[str, Any]] = None


class ContactErrorResponse(BaseModel):
    ok: bool = False
    error: str


# Project catalog
class ProjectKind(str, Enum):
    WEBSITE = "website"
    VIDEO = "video"
    PHOTO = "photo"


class Project(CamelCaseModel):
    title: str
    tag: str
    kind: ProjectKind
    site_url: Optional[str] = None
    description: Optional[str] = None
