"""Models for single address validation."""

from typing import Annotated, Optional

from pydantic import BeforeValidator, Field, field_validator

from .common import WireEnum, WireModel


class Verdict(WireEnum):
    """Categorical validity judgment for an address."""

    VALID = "valid"
    RISKY = "risky"
    INVALID = "invalid"


VerdictField = Annotated[Verdict, BeforeValidator(Verdict.parse)]


class EmailValidationRequest(WireModel):
    """An address to validate, with an optional one-word provenance tag."""

    email: str
    source: Optional[str] = None

    @field_validator("source")
    @classmethod
    def _one_word(cls, value):
        if value is not None and (not value or any(ch.isspace() for ch in value)):
            raise ValueError("source must be a single word")
        return value


class DomainChecks(WireModel):
    has_valid_address_syntax: bool
    has_mx_or_a_record: bool
    is_suspected_disposable_address: bool


class LocalPartChecks(WireModel):
    is_suspected_role_address: bool


class AdditionalChecks(WireModel):
    has_known_bounces: bool
    has_suspected_bounces: bool


class ValidationChecks(WireModel):
    """Granular checks behind a verdict."""

    domain: DomainChecks
    local_part: LocalPartChecks
    additional: AdditionalChecks


class EmailValidationResult(WireModel):
    """Validation verdict for one address."""

    email: str
    verdict: VerdictField
    score: float = Field(ge=0.0, le=1.0)
    local: str
    host: str
    suggestion: Optional[str] = None
    checks: ValidationChecks
    ip_address: Optional[str] = None
    source: Optional[str] = None


class EmailValidationResponse(WireModel):
    result: EmailValidationResult
