"""Error taxonomy for token issuance."""


class TokenIssuanceError(Exception):
    """Base class for every failure that prevents a token from being issued."""

    exit_code = 1


class KeyLoadError(TokenIssuanceError):
    """Key source unreadable or not valid PEM-encoded RSA private key material."""

    exit_code = 3


class InvalidClaimsError(TokenIssuanceError):
    """Issuer ID, lifetime, or issuance time cannot produce a valid claims set."""

    exit_code = 4


class SigningError(TokenIssuanceError):
    """The RS256 signing operation failed."""

    exit_code = 5


class ConfigurationError(TokenIssuanceError):
    """Settings could not be loaded or are incomplete."""

    exit_code = 6
