"""turnup exception classes."""


class TurnupError(Exception):
    """Base exception for all turnup errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(TurnupError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthenticationError(TurnupError):
    """Raised when the platform rejects the access token."""

    pass


class AuthorizationError(TurnupError):
    """Raised when access is denied."""

    pass


class NotFoundError(TurnupError):
    """Raised when a resource is not found."""

    pass


class ConflictError(TurnupError):
    """Raised on conflicts (existing branch, stale file sha, etc.)."""

    pass


class RateLimitedError(TurnupError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(TurnupError):
    """Raised on validation errors (422 and other 4xx)."""

    pass


class ServerError(TurnupError):
    """Raised on server errors (5xx) and exhausted connection retries."""

    pass


class NoRepositoriesFoundError(TurnupError):
    """Raised when gathering yields no repositories at all."""

    def __init__(self, message: str = "No repositories found.") -> None:
        super().__init__("NO_REPOSITORIES_FOUND", message)


class PackageParseError(TurnupError):
    """Raised when a package specifier cannot be parsed."""

    def __init__(self, spec: str, reason: str) -> None:
        super().__init__("PACKAGE_PARSE_ERROR", f"Invalid package {spec!r}: {reason}")
        self.spec = spec


class ManifestError(TurnupError):
    """Raised when a fetched package.json cannot be decoded."""

    def __init__(self, full_name: str, reason: str) -> None:
        super().__init__("MANIFEST_ERROR", f"{full_name}: {reason}")
        self.full_name = full_name


class LockfileGenerationError(TurnupError):
    """Raised when the package manager fails to produce a lockfile."""

    def __init__(self, package_manager: str, message: str) -> None:
        super().__init__("LOCKFILE_ERROR", f"{package_manager}: {message}")
        self.package_manager = package_manager
