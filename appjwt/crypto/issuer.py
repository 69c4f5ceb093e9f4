"""Short-lived JWT issuance signed with RS256."""

import logging
from datetime import datetime

import jwt
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from pydantic import ValidationError

from appjwt.crypto.clock import Clock, system_clock, to_epoch_seconds
from appjwt.crypto.errors import InvalidClaimsError, SigningError
from appjwt.crypto.keys import KeySource, load_signing_key
from appjwt.crypto.types import (
    MAX_LIFETIME_SECONDS,
    SIGNING_ALGORITHM,
    ClaimsSet,
    IssuedToken,
    IssuerConfig,
)

logger = logging.getLogger(__name__)


def build_claims(
    issuer_id: str,
    now: datetime | int | float,
    lifetime_seconds: int = MAX_LIFETIME_SECONDS,
) -> ClaimsSet:
    """Build the ``iat``/``exp``/``iss`` claims for a token issued at ``now``."""
    if not issuer_id:
        raise InvalidClaimsError("issuer ID must not be empty")
    if isinstance(lifetime_seconds, bool) or not isinstance(lifetime_seconds, int):
        raise InvalidClaimsError(
            f"lifetime must be whole seconds, got {lifetime_seconds!r}"
        )
    if lifetime_seconds <= 0:
        raise InvalidClaimsError(
            f"lifetime must be positive, got {lifetime_seconds}s"
        )
    if lifetime_seconds > MAX_LIFETIME_SECONDS:
        raise InvalidClaimsError(
            f"lifetime of {lifetime_seconds}s exceeds the "
            f"{MAX_LIFETIME_SECONDS}s maximum"
        )
    issued_at = to_epoch_seconds(now)
    try:
        claims = ClaimsSet(
            iat=issued_at,
            exp=issued_at + lifetime_seconds,
            iss=issuer_id,
        )
    except ValidationError as exc:
        raise InvalidClaimsError(str(exc)) from exc
    logger.debug(
        "Built claims iss=%s iat=%d exp=%d", claims.iss, claims.iat, claims.exp
    )
    return claims


def sign_claims(claims: ClaimsSet, signing_key: RSAPrivateKey) -> str:
    """Sign a claims set and return its compact serialization."""
    try:
        token = jwt.encode(
            claims.to_payload(),
            signing_key,
            algorithm=SIGNING_ALGORITHM,
        )
    except (jwt.PyJWTError, ValueError, TypeError) as exc:
        raise SigningError(f"could not sign token: {exc}") from exc
    logger.debug("Signed %s token for issuer %s", SIGNING_ALGORITHM, claims.iss)
    return token


def _issue(
    key_source: KeySource,
    config: IssuerConfig,
    now: datetime | int | float,
) -> IssuedToken:
    claims = build_claims(config.issuer_id, now, config.lifetime_seconds)
    signing_key = load_signing_key(key_source)
    return IssuedToken(token=sign_claims(claims, signing_key), claims=claims)


def issue_token(
    key_source: KeySource,
    config: IssuerConfig,
    now: datetime | int | float,
) -> str:
    """Load the signing key, build the claims for ``now``, and sign them.

    Raises ``InvalidClaimsError``, ``KeyLoadError`` or ``SigningError``; no
    token is produced on any of those paths.
    """
    return _issue(key_source, config, now).token


class TokenIssuer:
    """Issues tokens for one configuration, reading time from a clock."""

    def __init__(self, config: IssuerConfig, clock: Clock = system_clock) -> None:
        self._config = config
        self._clock = clock

    def issue(self, key_source: KeySource) -> IssuedToken:
        """Issue a token valid from the clock's current time."""
        return _issue(key_source, self._config, self._clock())
