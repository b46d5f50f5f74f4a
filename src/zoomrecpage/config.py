"""
Configuration management for zoomrecpage

The handler never reads ``os.environ`` itself: a ``Config`` is built from an
environment mapping (``os.environ`` by default) and handed to it, so tests can
pass a plain dict.
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import dotenv_values
from platformdirs import user_config_dir

from zoomrecpage.exceptions import ConfigError, MissingConfigError

DISPLAY_MODES = ("detailed", "simple")
MAX_PAGE_SIZE = 300

# config-file key -> environment variable
ENV_KEYS = {
    "zoom_account_id": "ZOOM_ACCOUNT_ID",
    "zoom_client_id": "ZOOM_CLIENT_ID",
    "zoom_client_secret": "ZOOM_CLIENT_SECRET",
    "meeting_id": "MEETING_ID",
    "user_id": "ZOOM_USER_ID",
    "timezone": "DISPLAY_TIMEZONE",
    "display_mode": "DISPLAY_MODE",
    "page_title": "PAGE_TITLE",
    "page_size": "RECORDINGS_PAGE_SIZE",
    "zoom_api_base_url": "ZOOM_API_BASE_URL",
    "zoom_oauth_token_url": "ZOOM_OAUTH_TOKEN_URL",
    "log_level": "LOG_LEVEL",
}


class Config:
    """Configuration loader and validator with multi-source support"""

    # Order matters: it is the order names appear in error messages
    REQUIRED_FIELDS = ["zoom_account_id", "zoom_client_id", "zoom_client_secret", "meeting_id"]
    OPTIONAL_FIELDS: dict[str, Any] = {
        "user_id": "me",
        "timezone": "America/Mexico_City",
        "display_mode": "detailed",
        "page_title": "MCA Meeting Zoom Recordings",
        "page_size": 200,
        "zoom_api_base_url": "https://api.zoom.us/v2",
        "zoom_oauth_token_url": None,
        "log_level": "INFO",
    }

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        config_file: str | None = None,
    ):
        # Configuration priority:
        # 1. Explicit config file (JSON/YAML/.env)
        # 2. Environment variables
        # 3. Default config file in the user config directory
        # 4. Defaults
        env = os.environ if environ is None else environ
        self.config_dir = Path(user_config_dir("zoomrecpage"))

        # A broken default file is reported by validate(), after missing variables
        self._default_file_error: ConfigError | None = None
        if config_file is not None:
            file_data = self._load_config_file(config_file)
            prefer_env = False
        else:
            file_data = {}
            default_config = self._find_default_config()
            if default_config:
                try:
                    file_data = self._load_config_file(str(default_config))
                except ConfigError as e:
                    self._default_file_error = e
            prefer_env = True

        def _resolve(key: str) -> Any:
            file_value = file_data.get(key)
            env_value = env.get(ENV_KEYS[key])
            if prefer_env:
                return env_value if env_value is not None else file_value
            return file_value if file_value is not None else env_value

        # Store credentials privately to keep them out of logs/tracebacks
        self._zoom_account_id = _clean(_resolve("zoom_account_id"))
        self._zoom_client_id = _clean(_resolve("zoom_client_id"))
        self._zoom_client_secret = _clean(_resolve("zoom_client_secret"))

        # Echoed verbatim on the page, so only None is normalised
        raw_meeting_id = _resolve("meeting_id")
        self.meeting_id = "" if raw_meeting_id is None else str(raw_meeting_id)

        self.user_id = _clean(_resolve("user_id")) or self.OPTIONAL_FIELDS["user_id"]
        self.timezone = _clean(_resolve("timezone")) or self.OPTIONAL_FIELDS["timezone"]
        self.display_mode = (
            _clean(_resolve("display_mode")) or self.OPTIONAL_FIELDS["display_mode"]
        ).lower()
        self.page_title = _clean(_resolve("page_title")) or self.OPTIONAL_FIELDS["page_title"]
        self.log_level = (_clean(_resolve("log_level")) or self.OPTIONAL_FIELDS["log_level"]).upper()

        raw_page_size = _clean(_resolve("page_size"))
        self.page_size = self._parse_page_size(raw_page_size)

        api_base = _clean(_resolve("zoom_api_base_url")) or self.OPTIONAL_FIELDS["zoom_api_base_url"]
        self.zoom_api_base_url = api_base.rstrip("/")
        token_override = _clean(_resolve("zoom_oauth_token_url"))
        self.zoom_oauth_token_url = (
            token_override if token_override else _derive_token_url(self.zoom_api_base_url)
        )

    @property
    def zoom_account_id(self) -> str | None:
        """Zoom account ID (read-only property)"""
        return self._zoom_account_id

    @property
    def zoom_client_id(self) -> str | None:
        """Zoom client ID (read-only property)"""
        return self._zoom_client_id

    @property
    def zoom_client_secret(self) -> str | None:
        """Zoom client secret (read-only property)"""
        return self._zoom_client_secret

    def __repr__(self) -> str:
        """
        String representation that excludes credentials

        Prevents accidental credential exposure in logs, tracebacks, and debugging
        """
        s2s_configured = bool(
            self._zoom_account_id and self._zoom_client_id and self._zoom_client_secret
        )
        return (
            f"Config("
            f"meeting_id={self.meeting_id!r}, "
            f"user_id={self.user_id!r}, "
            f"display_mode={self.display_mode!r}, "
            f"timezone={self.timezone!r}, "
            f"zoom_api_base_url={self.zoom_api_base_url!r}, "
            f"credentials={'configured' if s2s_configured else 'missing'}"
            f")"
        )

    @staticmethod
    def _is_null_device(path_str: str) -> bool:
        """Return True when the provided path represents the OS null device."""
        normalized = path_str.strip().lower().replace("\\", "/")
        null_candidates = {"/dev/null", "nul", "nul:", os.devnull.lower()}
        return normalized in null_candidates

    def _parse_page_size(self, raw: str | None) -> Any:
        # Invalid values are kept as-is and reported by validate()
        if raw is None:
            return self.OPTIONAL_FIELDS["page_size"]
        try:
            return int(raw)
        except ValueError:
            return raw

    def _load_config_file(self, config_path: str) -> dict[str, Any]:
        """
        Load configuration from a JSON, YAML or .env file

        Args:
            config_path: Path to config file (.json, .yaml/.yml, anything else is .env)

        Returns:
            Configuration dictionary keyed by config-file names

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        if self._is_null_device(config_path):
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ConfigError(
                f"Config file '{config_path}' does not exist. "
                "Provide an existing JSON/YAML/.env file or remove the --config flag."
            )

        suffix = path.suffix.lower()
        if suffix not in (".json", ".yaml", ".yml"):
            return self._load_dotenv(path)

        try:
            with open(path) as f:
                data = json.load(f) if suffix == ".json" else self._load_yaml(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load config file {config_path}: {e}") from e

        self._validate_schema(data, path)
        return dict(data)

    @staticmethod
    def _load_dotenv(path: Path) -> dict[str, Any]:
        """Read a .env file without touching the process environment"""
        by_env_name = {env_name: key for key, env_name in ENV_KEYS.items()}
        values = dotenv_values(path)
        return {
            by_env_name[name]: value
            for name, value in values.items()
            if name in by_env_name and value is not None
        }

    def _load_yaml(self, file_obj: Any) -> Any:
        """Load YAML configuration"""
        try:
            return yaml.safe_load(file_obj) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

    def _find_default_config(self) -> Path | None:
        """Locate the default config file in the user config directory."""
        for filename in ("config.json", "config.yaml", "config.yml"):
            candidate = self.config_dir / filename
            if candidate.exists():
                return candidate
        return None

    def _validate_schema(self, data: Any, path: Path) -> None:
        """
        Validate configuration schema

        Raises:
            ConfigError: If schema validation fails
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON/YAML object")

        known_keys = set(self.REQUIRED_FIELDS) | set(self.OPTIONAL_FIELDS.keys())
        unknown_keys = set(data.keys()) - known_keys
        if unknown_keys:
            raise ConfigError(
                f"Unknown keys in config file {path}: {', '.join(sorted(unknown_keys))}\n"
                f"Valid keys: {', '.join(sorted(known_keys))}"
            )

        for key, value in data.items():
            if value is None:
                continue
            if key in ("meeting_id", "page_size"):
                # Meeting IDs are commonly written as bare numbers in YAML/JSON
                if isinstance(value, bool) or not isinstance(value, str | int):
                    raise ConfigError(f"{key} must be a string or integer in {path}")
            elif not isinstance(value, str):
                raise ConfigError(f"{key} must be a string in {path}")

    def missing_fields(self) -> list[str]:
        """Names of the required environment variables that are absent or empty"""
        values = {
            "zoom_account_id": self.zoom_account_id,
            "zoom_client_id": self.zoom_client_id,
            "zoom_client_secret": self.zoom_client_secret,
            "meeting_id": self.meeting_id,
        }
        return [ENV_KEYS[key] for key in self.REQUIRED_FIELDS if not values[key]]

    def validate(self) -> None:
        """Validate required configuration, then the optional settings"""
        missing = self.missing_fields()
        if missing:
            raise MissingConfigError(missing)

        if self._default_file_error is not None:
            raise self._default_file_error

        if self.display_mode not in DISPLAY_MODES:
            raise ConfigError(
                f"Invalid display mode: {self.display_mode!r}",
                details=f"DISPLAY_MODE must be one of {', '.join(DISPLAY_MODES)}",
            )

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(
                f"Unknown timezone: {self.timezone!r}",
                details="DISPLAY_TIMEZONE must be an IANA zone name such as America/Mexico_City",
            ) from e

        if (
            isinstance(self.page_size, bool)
            or not isinstance(self.page_size, int)
            or not 1 <= self.page_size <= MAX_PAGE_SIZE
        ):
            raise ConfigError(
                f"Invalid page size: {self.page_size!r}",
                details=f"RECORDINGS_PAGE_SIZE must be an integer between 1 and {MAX_PAGE_SIZE}",
            )

    def is_valid(self) -> bool:
        """Check if configuration is valid"""
        try:
            self.validate()
            return True
        except ConfigError:
            return False


def _clean(value: Any) -> str | None:
    """Stringify and strip a setting; empty strings become None"""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _derive_token_url(api_base_url: str) -> str:
    """Infer the OAuth token URL from the API base host (Zoom vs ZoomGov, etc.)."""
    parsed = urlsplit(api_base_url)
    host = parsed.netloc
    if host.startswith("api."):
        host = host[4:]
    scheme = parsed.scheme or "https"
    return urlunsplit((scheme, host, "/oauth/token", "", ""))
