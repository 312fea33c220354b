"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Identity(BaseModel):
    """Request-scoped identity derived from a verified token."""

    subject: str = Field(min_length=1)


class IssueTokenRequest(BaseModel):
    username: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def reject_blank_username(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username must contain a non-whitespace character")
        return value


class IssuedToken(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    expires_in: int = Field(alias="expiresIn")
