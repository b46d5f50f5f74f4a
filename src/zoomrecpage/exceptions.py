"""
Custom exception classes with error codes and public response messages
"""

MISSING_ENV_MESSAGE = (
    "Missing env vars. Set ZOOM_ACCOUNT_ID, ZOOM_CLIENT_ID, ZOOM_CLIENT_SECRET, MEETING_ID in Netlify."
)
UNEXPECTED_ERROR_MESSAGE = "Unexpected error loading recordings."


class ZoomRecPageError(Exception):
    """Base exception for zoomrecpage errors"""

    public_message = UNEXPECTED_ERROR_MESSAGE

    def __init__(self, message: str, code: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON output"""
        return {"code": self.code, "message": self.message, "details": self.details}


class ConfigError(ZoomRecPageError):
    """Missing or invalid configuration"""

    public_message = "Invalid configuration."

    def __init__(self, message: str, details: str = "", code: str = "INVALID_CONFIG"):
        super().__init__(message, code, details)


class MissingConfigError(ConfigError):
    """One or more required settings are absent or empty"""

    public_message = MISSING_ENV_MESSAGE

    def __init__(self, missing: list[str]):
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}",
            details="Set them in the function environment, a .env file or a config file",
            code="MISSING_CONFIG",
        )
        self.missing = list(missing)


class TokenRequestError(ZoomRecPageError):
    """OAuth token exchange failed"""

    public_message = "Failed to get Zoom token."

    def __init__(self, message: str, details: str = "", status_code: int | None = None):
        super().__init__(message, "AUTH_FAILED", details)
        self.status_code = status_code


class RecordingsFetchError(ZoomRecPageError):
    """Listing the user's cloud recordings failed"""

    public_message = "Failed to fetch recordings from Zoom."

    def __init__(self, message: str, details: str = "", status_code: int | None = None):
        super().__init__(message, "RECORDINGS_FETCH_FAILED", details)
        self.status_code = status_code
