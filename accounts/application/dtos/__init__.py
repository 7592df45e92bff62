"""Application DTOs."""

from accounts.application.dtos.credential_dto import PasswordDTO, VerificationCodeDTO

__all__ = ["PasswordDTO", "VerificationCodeDTO"]
