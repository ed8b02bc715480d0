# =============================================================================
# Service Models Module
# =============================================================================
# Defines models exchanged with the dashboard backend:
# - ServiceRecord: a connected API endpoint (persisted locally)
# - InputType: kind of resource a user links to the dashboard
# - InputSubmission: payload posted to the backend "inputs" endpoint
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["ServiceRecord", "InputType", "InputSubmission"]


def _require_http_url(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError(f"URL must be a string, got {type(value).__name__}")
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"URL must start with http:// or https://, got '{value}'")
    return value


class ServiceRecord(BaseModel):
    """
    A connected API endpoint.

    ``api_url`` is also accepted as ``apiUrl`` so records written by the
    browser dashboard load unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    user_id: Optional[str] = None
    name: str = ""
    provider: str = "Unknown"
    type: str = ""
    region: str = "Unknown"
    api_url: str = Field(..., validation_alias="apiUrl")
    created_at: Optional[datetime] = None

    @field_validator("api_url", mode="before")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        return _require_http_url(v)


class InputType(str, Enum):
    """Kind of resource linked from the sidebar."""
    API = "API"
    MODEL = "Model"
    DATASET = "Dataset"

    @classmethod
    def from_choice(cls, choice: str) -> "InputType":
        """
        Map a sidebar choice ("api", "ml-model", "dataset") to an InputType.

        Anything that is not "api" or "ml-model" is a dataset link.
        """
        choice = choice.strip().lower()
        if choice == "api":
            return cls.API
        if choice in ("ml-model", "model"):
            return cls.MODEL
        return cls.DATASET


class InputSubmission(BaseModel):
    """Payload for the backend ``inputs/`` endpoint."""

    user_id: str = Field(..., min_length=1)
    input_type: InputType
    data_link: str = Field(..., min_length=1)
