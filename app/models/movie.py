# app/models/movie.py

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

TEXT_FIELDS = ("title", "genre", "streamingLink")


def _check_not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must be a non-empty string")
    return v


# --- Write-side Models (MovieInput) ---
class MovieCreate(BaseModel):
    """Full MovieInput accepted on create. Every field is required."""
    title: str = Field(..., description="Movie title.")
    genre: str = Field(..., description="Genre label, e.g. 'Sci-Fi'.")
    rating: float = Field(
        ..., ge=0, le=10, strict=True, allow_inf_nan=False,
        description="Rating on a closed 0-10 scale."
    )
    streamingLink: str = Field(..., description="URL where the movie can be streamed.")

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        return _check_not_blank(v)


class MovieUpdate(BaseModel):
    """
    Partial MovieInput accepted on update.

    Absent fields keep their stored value. Defaults are never validated, so the
    validator below only sees None when the client sent an explicit null.
    """
    title: Optional[str] = Field(None, description="New title.")
    genre: Optional[str] = Field(None, description="New genre.")
    rating: Optional[Annotated[float, Field(ge=0, le=10, strict=True, allow_inf_nan=False)]] = Field(
        None, description="New rating."
    )
    streamingLink: Optional[str] = Field(None, description="New streaming URL.")

    @field_validator("title", "genre", "rating", "streamingLink")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError("may not be null")
        if info.field_name in TEXT_FIELDS:
            return _check_not_blank(v)
        return v


# --- Models for API Responses ---
class MovieRead(BaseModel):
    """A stored movie as returned by the API, with the store-assigned id."""
    id: str = Field(..., description="Internal database ID (MongoDB ObjectId as string).")
    title: str
    genre: str
    rating: float
    streamingLink: str


class MessageResponse(BaseModel):
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Shape of every error body. `errors` is only set for validation failures."""
    message: str
    errors: Optional[List[FieldError]] = None
