"""Credential DTOs for the application layer using Pydantic.

These snapshots carry credentials between the owning account aggregate
(persistence) and the credential use cases. They hold only encoded values:
never a plaintext password.
"""

from typing import Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from accounts.domain.value_objects import Password, VerificationCode


class PasswordDTO(BaseModel):
    """Persisted form of a password."""

    hash: str = Field(..., min_length=1, description="Encoded PBKDF2 hash")
    expires_at_utc: Optional[AwareDatetime] = Field(
        default=None, description="Instant the password expired, if any"
    )
    must_change: bool = Field(
        default=False, description="Whether the password must be rotated"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "hash": "10000.c2FsdHNhbHRzYWx0c2FsdA==.a2V5a2V5a2V5a2V5a2V5a2V5a2V5a2V5a2V5a2U=",
                "expires_at_utc": None,
                "must_change": False,
            }
        },
    )

    @classmethod
    def from_entity(cls, password: Password) -> "PasswordDTO":
        return cls(
            hash=password.to_encoded_string(),
            expires_at_utc=password.expires_at_utc,
            must_change=password.must_change,
        )

    def to_entity(self) -> Password:
        return Password.restore(
            hash=self.hash,
            expires_at_utc=self.expires_at_utc,
            must_change=self.must_change,
        )


class VerificationCodeDTO(BaseModel):
    """Persisted form of a verification code."""

    code: str = Field(..., min_length=6, max_length=6)
    expires_at_utc: Optional[AwareDatetime] = None
    verified_at_utc: Optional[AwareDatetime] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_entity(cls, verification_code: VerificationCode) -> "VerificationCodeDTO":
        return cls(
            code=verification_code.to_encoded_string(),
            expires_at_utc=verification_code.expires_at_utc,
            verified_at_utc=verification_code.verified_at_utc,
        )

    def to_entity(self) -> VerificationCode:
        return VerificationCode.restore(
            code=self.code,
            expires_at_utc=self.expires_at_utc,
            verified_at_utc=self.verified_at_utc,
        )

    @property
    def is_active(self) -> bool:
        return self.verified_at_utc is not None and self.expires_at_utc is None
