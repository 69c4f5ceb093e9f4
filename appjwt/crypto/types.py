"""Type definitions for issuer configuration and JWT claims."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_LIFETIME_SECONDS = 600
SIGNING_ALGORITHM = "RS256"


class IssuerConfig(BaseModel):
    """Caller-supplied parameters for token issuance.

    Values are checked when a token is issued, not here, so that a bad
    issuer ID or lifetime surfaces as ``InvalidClaimsError``.
    """

    model_config = ConfigDict(frozen=True)

    issuer_id: str
    lifetime_seconds: int = MAX_LIFETIME_SECONDS


class ClaimsSet(BaseModel):
    """Registered claims of a short-lived app JWT."""

    model_config = ConfigDict(frozen=True, strict=True)

    iat: int = Field(ge=0)
    exp: int
    iss: str = Field(min_length=1)

    @model_validator(mode="after")
    def _check_validity_window(self) -> Self:
        lifetime = self.exp - self.iat
        if lifetime <= 0:
            raise ValueError("exp must be later than iat")
        if lifetime > MAX_LIFETIME_SECONDS:
            raise ValueError(
                f"lifetime of {lifetime}s exceeds the "
                f"{MAX_LIFETIME_SECONDS}s maximum"
            )
        return self

    @property
    def lifetime_seconds(self) -> int:
        return self.exp - self.iat

    def to_payload(self) -> dict[str, int | str]:
        """Return the JSON payload in registered-claim order."""
        return {"iat": self.iat, "exp": self.exp, "iss": self.iss}


class IssuedToken(BaseModel):
    """A signed token together with the claims it carries."""

    model_config = ConfigDict(frozen=True)

    token: str
    claims: ClaimsSet

    def to_output(self) -> dict[str, int | str]:
        """Shape written by the ``json`` output format."""
        return {
            "token": self.token,
            "issued_at": self.claims.iat,
            "expires_at": self.claims.exp,
        }
