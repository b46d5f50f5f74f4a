"""
Unit tests for config module
"""

import json
import os

import pytest

from zoomrecpage.config import Config
from zoomrecpage.exceptions import MISSING_ENV_MESSAGE, ConfigError, MissingConfigError

from .page_test_utils import REQUIRED_ENV, make_config


@pytest.fixture(autouse=True)
def isolated_config_dir(monkeypatch, tmp_path):
    """Keep the real user config directory out of every test"""
    config_dir = tmp_path / "user-config"
    monkeypatch.setattr("zoomrecpage.config.user_config_dir", lambda app: str(config_dir))
    return config_dir


def test_config_loads_from_mapping():
    config = Config(dict(REQUIRED_ENV))
    assert config.zoom_account_id == "acc"
    assert config.zoom_client_id == "cli"
    assert config.zoom_client_secret == "sec"
    assert config.meeting_id == "222"


def test_config_loads_from_process_env(monkeypatch):
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)

    config = Config()
    assert config.zoom_account_id == "acc"
    assert config.meeting_id == "222"


def test_config_defaults():
    config = make_config()
    assert config.user_id == "me"
    assert config.timezone == "America/Mexico_City"
    assert config.display_mode == "detailed"
    assert config.page_title == "MCA Meeting Zoom Recordings"
    assert config.page_size == 200
    assert config.zoom_api_base_url == "https://api.zoom.us/v2"
    assert config.zoom_oauth_token_url == "https://zoom.us/oauth/token"
    assert config.log_level == "INFO"


def test_config_optional_overrides():
    config = make_config(
        ZOOM_USER_ID="host@example.com",
        DISPLAY_TIMEZONE="Europe/Madrid",
        DISPLAY_MODE="SIMPLE",
        PAGE_TITLE="Board Meetings",
        RECORDINGS_PAGE_SIZE="100",
    )
    assert config.user_id == "host@example.com"
    assert config.timezone == "Europe/Madrid"
    assert config.display_mode == "simple"
    assert config.page_title == "Board Meetings"
    assert config.page_size == 100
    config.validate()


def test_empty_user_id_falls_back_to_me():
    assert make_config(ZOOM_USER_ID="").user_id == "me"


def test_token_url_derived_from_api_host():
    config = make_config(ZOOM_API_BASE_URL="https://api.zoomgov.com/v2/")
    assert config.zoom_api_base_url == "https://api.zoomgov.com/v2"
    assert config.zoom_oauth_token_url == "https://zoomgov.com/oauth/token"


def test_token_url_override():
    config = make_config(ZOOM_OAUTH_TOKEN_URL="https://auth.example.com/token")
    assert config.zoom_oauth_token_url == "https://auth.example.com/token"


def test_meeting_id_kept_verbatim():
    assert make_config(MEETING_ID=" 222 ").meeting_id == " 222 "


@pytest.mark.parametrize("missing", list(REQUIRED_ENV))
def test_validation_fails_for_each_missing_var(missing):
    config = make_config(**{missing: None})
    with pytest.raises(MissingConfigError) as exc_info:
        config.validate()

    assert exc_info.value.missing == [missing]
    assert exc_info.value.public_message == MISSING_ENV_MESSAGE


@pytest.mark.parametrize("missing", list(REQUIRED_ENV))
def test_validation_fails_for_each_empty_var(missing):
    config = make_config(**{missing: ""})
    with pytest.raises(MissingConfigError):
        config.validate()


def test_missing_fields_lists_all_in_order():
    config = Config({}, config_file=os.devnull)
    assert config.missing_fields() == [
        "ZOOM_ACCOUNT_ID",
        "ZOOM_CLIENT_ID",
        "ZOOM_CLIENT_SECRET",
        "MEETING_ID",
    ]
    assert not config.is_valid()


def test_missing_vars_reported_before_invalid_options():
    config = make_config(MEETING_ID=None, DISPLAY_TIMEZONE="Not/AZone")
    with pytest.raises(MissingConfigError):
        config.validate()


def test_invalid_timezone():
    config = make_config(DISPLAY_TIMEZONE="Not/AZone")
    with pytest.raises(ConfigError, match="Unknown timezone"):
        config.validate()


def test_invalid_display_mode():
    config = make_config(DISPLAY_MODE="fancy")
    with pytest.raises(ConfigError, match="Invalid display mode"):
        config.validate()


@pytest.mark.parametrize("page_size", ["0", "301", "lots"])
def test_invalid_page_size(page_size):
    config = make_config(RECORDINGS_PAGE_SIZE=page_size)
    with pytest.raises(ConfigError, match="Invalid page size"):
        config.validate()


def test_config_repr_excludes_credentials():
    config = Config(
        {
            "ZOOM_ACCOUNT_ID": "secret_account_123",
            "ZOOM_CLIENT_ID": "secret_client_456",
            "ZOOM_CLIENT_SECRET": "very_secret_password_789",
            "MEETING_ID": "222",
        },
        config_file=os.devnull,
    )
    repr_str = repr(config)

    assert "secret_account_123" not in repr_str
    assert "secret_client_456" not in repr_str
    assert "very_secret_password_789" not in repr_str
    assert "credentials=configured" in repr_str
    assert "meeting_id='222'" in repr_str


def test_config_repr_shows_missing_credentials():
    config = Config({}, config_file=os.devnull)
    assert "credentials=missing" in repr(config)


def test_json_config_file_overrides_env(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"meeting_id": 333, "display_mode": "simple"}))

    config = Config(dict(REQUIRED_ENV), config_file=str(config_file))
    assert config.meeting_id == "333"
    assert config.display_mode == "simple"
    # Values absent from the file still come from the environment
    assert config.zoom_client_id == "cli"


def test_yaml_config_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "zoom_account_id: acc\n"
        "zoom_client_id: cli\n"
        "zoom_client_secret: sec\n"
        "meeting_id: 85292826718\n"
        "timezone: UTC\n"
    )

    config = Config({}, config_file=str(config_file))
    assert config.meeting_id == "85292826718"
    assert config.timezone == "UTC"
    config.validate()


def test_dotenv_config_file_does_not_touch_process_env(tmp_path, monkeypatch):
    monkeypatch.delenv("MEETING_ID", raising=False)
    env_file = tmp_path / "function.env"
    env_file.write_text("MEETING_ID=444\nZOOM_USER_ID=host@example.com\nUNRELATED=1\n")

    config = Config({}, config_file=str(env_file))
    assert config.meeting_id == "444"
    assert config.user_id == "host@example.com"
    assert "MEETING_ID" not in os.environ


def test_default_config_file_is_discovered(isolated_config_dir):
    isolated_config_dir.mkdir()
    (isolated_config_dir / "config.json").write_text(json.dumps({"page_title": "From file"}))

    config = Config(dict(REQUIRED_ENV))
    assert config.page_title == "From file"


def test_env_overrides_default_config_file(isolated_config_dir):
    isolated_config_dir.mkdir()
    (isolated_config_dir / "config.json").write_text(json.dumps({"meeting_id": "999"}))

    config = Config(dict(REQUIRED_ENV))
    assert config.meeting_id == "222"


def test_missing_config_file_raises_error(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        Config({}, config_file=str(tmp_path / "missing.json"))


def test_unknown_keys_rejected(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"meeting": "1"}))

    with pytest.raises(ConfigError, match="Unknown keys"):
        Config({}, config_file=str(config_file))


def test_wrong_type_rejected(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"timezone": 5}))

    with pytest.raises(ConfigError, match="timezone must be a string"):
        Config({}, config_file=str(config_file))


def test_invalid_json_rejected(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        Config({}, config_file=str(config_file))


def test_non_object_config_rejected(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("[1, 2]")

    with pytest.raises(ConfigError, match="must contain a JSON/YAML object"):
        Config({}, config_file=str(config_file))


def test_broken_default_config_file_reported_after_missing_vars(isolated_config_dir):
    isolated_config_dir.mkdir()
    (isolated_config_dir / "config.json").write_text("{not json")

    config = Config({})
    with pytest.raises(MissingConfigError):
        config.validate()


def test_broken_default_config_file_reported_by_validate(isolated_config_dir):
    isolated_config_dir.mkdir()
    (isolated_config_dir / "config.json").write_text("{not json")

    config = Config(dict(REQUIRED_ENV))
    assert config.meeting_id == "222"
    with pytest.raises(ConfigError, match="Invalid JSON"):
        config.validate()


def test_log_level_from_config_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("log_level: debug\n")

    assert Config({}, config_file=str(config_file)).log_level == "DEBUG"
