"""Unit tests for credential DTOs."""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from accounts.application.dtos import PasswordDTO, VerificationCodeDTO
from accounts.domain.value_objects import Password, VerificationCode

pytestmark = pytest.mark.unit


def test_password_dto_from_entity(clock):
    password = Password.restore("HASHED:secret123", clock.now(), must_change=True)

    dto = PasswordDTO.from_entity(password)

    assert dto.hash == "HASHED:secret123"
    assert dto.expires_at_utc == clock.now()
    assert dto.must_change is True


def test_password_dto_requires_hash():
    with pytest.raises(ValidationError):
        PasswordDTO(hash="")


def test_password_dto_is_frozen():
    dto = PasswordDTO(hash="HASHED:secret123")

    with pytest.raises(ValidationError):
        dto.must_change = True


def test_password_dto_json_round_trip(clock):
    dto = PasswordDTO(hash="10000.c2FsdA==.a2V5", expires_at_utc=clock.now())

    restored = PasswordDTO.model_validate_json(dto.model_dump_json())

    assert restored == dto
    assert restored.to_entity().is_expired(clock) is True


def test_verification_code_dto_to_entity(clock):
    dto = VerificationCodeDTO(
        code="ABC123", expires_at_utc=clock.now() + timedelta(minutes=5)
    )

    code = dto.to_entity()

    assert isinstance(code, VerificationCode)
    assert code.is_pending(clock) is True
    assert dto.is_active is False


@pytest.mark.parametrize("code", ["ABC12", "ABC1234"])
def test_verification_code_dto_length(code):
    with pytest.raises(ValidationError):
        VerificationCodeDTO(code=code)


def test_password_dto_rejects_naive_datetime():
    """Test that a stored expiry without an offset is refused at the boundary."""
    payload = (
        '{"hash": "HASHED:Password123!", '
        '"expires_at_utc": "2023-12-31T00:00:00", "must_change": false}'
    )

    with pytest.raises(ValidationError, match="timezone"):
        PasswordDTO.model_validate_json(payload)


def test_verification_code_dto_rejects_naive_datetime():
    with pytest.raises(ValidationError, match="timezone"):
        VerificationCodeDTO(code="ABC123", expires_at_utc=datetime(2030, 1, 1))


def test_verification_code_dto_accepts_offset_datetime(clock):
    dto = VerificationCodeDTO.model_validate_json(
        '{"code": "ABC123", "expires_at_utc": "2024-01-01T12:05:00+00:00"}'
    )

    assert dto.to_entity().is_pending(clock) is True
