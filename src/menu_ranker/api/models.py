"""Pydantic models for API request payloads."""

from pydantic import AliasChoices, BaseModel, Field


class RankRequest(BaseModel):
    """Batch ranking request."""

    names: list[str] = Field(validation_alias=AliasChoices("names", "restaurantNames"))
    limit: int | None = Field(default=None, ge=1)


class RefreshRequest(BaseModel):
    """Single restaurant refresh request."""

    name: str = Field(
        min_length=1, validation_alias=AliasChoices("name", "restaurantName")
    )
