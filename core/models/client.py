# =============================================================================
# core/models/client.py - Client Schemas
# =============================================================================
# A client is an artist or agency that buys packages and posts.
# Only name, agency name and the "frequent" flag may change after creation.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Client name cannot be blank")
    return value


class ClientCreate(BaseModel):
    """
    Schema for registering a new client.

    Example:
        {
            "name": "MC Ritmo",
            "agency_name": "Ritmo Records",
            "is_frequent": true
        }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Client (artist) name"
    )

    agency_name: str | None = Field(
        default=None,
        max_length=255,
        description="Agency that represents the client, if any"
    )

    is_frequent: bool = Field(
        default=False,
        description="Marks returning clients"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        return _clean_name(value)


class ClientUpdate(BaseModel):
    """
    Schema for editing a client.

    Every field is optional; only the provided ones are changed.
    An explicit null clears agency_name and is ignored for the other fields.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    agency_name: str | None = Field(default=None, max_length=255)
    is_frequent: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        return _clean_name(value)


class Client(BaseModel):
    """Stored client record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    agency_name: str | None = None
    is_frequent: bool = False
    created_at: datetime
    updated_at: datetime
