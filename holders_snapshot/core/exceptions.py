"""Custom exceptions for the holders snapshot tool."""


class SnapshotError(Exception):
    """Base exception for all holders snapshot errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DataSourceError(SnapshotError):
    """Raised when a data source fails or returns invalid data."""

    def __init__(
        self,
        source: str,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
    ):
        full_message = f"[{source}] {message}"
        super().__init__(
            full_message,
            {
                "source": source,
                "endpoint": endpoint,
                "status_code": status_code,
            },
        )
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code


class RateLimitError(DataSourceError):
    """Raised when API rate limit is hit."""

    def __init__(
        self,
        source: str,
        retry_after_seconds: int | None = None,
        endpoint: str | None = None,
    ):
        message = "Rate limit exceeded"
        if retry_after_seconds:
            message += f", retry after {retry_after_seconds}s"
        super().__init__(source, message, endpoint=endpoint, status_code=429)
        self.retry_after_seconds = retry_after_seconds


class MalformedResponseError(DataSourceError):
    """Raised when a page lacks the expected connection structure."""

    def __init__(self, message: str, source: str = "sui_graphql"):
        super().__init__(source, message)


class InvalidAmountError(SnapshotError):
    """Raised when a human-decimal amount cannot be parsed."""

    def __init__(self, amount: str, reason: str | None = None):
        message = f"Invalid amount: {amount}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"amount": amount})
        self.amount = amount


class PrecisionOverflowError(InvalidAmountError):
    """Raised when an amount has more fractional digits than the token allows."""

    def __init__(self, amount: str, fraction_digits: int, decimals: int):
        super().__init__(
            amount,
            f"too many decimal places ({fraction_digits}), max is {decimals}",
        )
        self.details.update({"fraction_digits": fraction_digits, "decimals": decimals})
        self.fraction_digits = fraction_digits
        self.decimals = decimals


class NoEligibleHoldersError(SnapshotError):
    """Raised when no balance remains to weight an allocation after exclusions."""

    def __init__(self, holder_count: int, excluded_count: int):
        super().__init__(
            "No eligible holders for airdrop after exclusions",
            {"holders": holder_count, "excluded": excluded_count},
        )
        self.holder_count = holder_count
        self.excluded_count = excluded_count


class ArgumentError(SnapshotError):
    """Raised when the snapshot is requested with inconsistent arguments."""


class MissingArgumentValueError(ArgumentError):
    """Raised when an option is given without a usable value."""

    def __init__(self, option: str):
        super().__init__(f"Missing value for {option}", {"option": option})
        self.option = option


class ConfigurationError(SnapshotError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str):
        full_message = f"Configuration error [{config_key}]: {message}"
        super().__init__(full_message, {"config_key": config_key})
        self.config_key = config_key
