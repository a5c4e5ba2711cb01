"""Error taxonomy for a scan.

Errors are returned up the call chain as values inside ``(ok, result)``
tuples rather than raised. The scan command decides when to abort.
"""


class ScanError(Exception):
    """Base class for failures that abort a scan."""

    pass


class AuthError(ScanError):
    """Raised when the caller's IAM identity cannot be resolved."""

    pass


class UpstreamError(ScanError):
    """Raised when any CodeCommit or IAM call fails, for any reason."""

    pass


class ConfigError(ValueError):
    """Raised when the settings file cannot be used."""

    pass
