"""Access Schemas — share-by-email payload and revocation result.

Invariants:
    - ShareRequest.email is only shape-checked here; unknown users are rejected by SharingPolicy
"""

from pydantic import BaseModel, Field, field_validator


class ShareRequest(BaseModel):
    email: str = Field(min_length=1, max_length=254)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("email cannot be empty or whitespace")
        return v


class RevokeResult(BaseModel):
    """Number of grants removed; zero when nothing was shared."""
    revoked: int
