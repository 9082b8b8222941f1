class SousChefError(Exception):
    pass


class ValidationError(SousChefError):
    """Required input missing or inconsistent. Blocks an action."""


class NetworkError(SousChefError):
    """Model endpoint unreachable or answered with a non-success status."""


class MissingCredentialError(NetworkError):
    pass


class ParseError(SousChefError):
    """Model answered with something other than the requested JSON."""
