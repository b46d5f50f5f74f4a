"""
zoomrecpage - Render a Zoom meeting's cloud recordings as a web page
"""

try:
    from importlib.metadata import version

    __version__ = version("zoomrecpage")
except Exception:
    # Fallback for editable/uninstalled checkouts
    __version__ = "0.dev0"
__author__ = "zoomrecpage"
__description__ = "Serverless page listing the cloud recordings of one Zoom meeting"

from .config import Config
from .exceptions import (
    ConfigError,
    MissingConfigError,
    RecordingsFetchError,
    TokenRequestError,
    ZoomRecPageError,
)
from .handler import HttpResponse, RecordingsPageHandler, handle_request
from .logger import setup_logging
from .recordings import DisplayMode, RecordingSelector
from .templates import PageRenderer, format_timestamp
from .zoom_client import ZoomClient

__all__ = [
    "Config",
    "ConfigError",
    "MissingConfigError",
    "TokenRequestError",
    "RecordingsFetchError",
    "ZoomRecPageError",
    "HttpResponse",
    "RecordingsPageHandler",
    "handle_request",
    "DisplayMode",
    "RecordingSelector",
    "PageRenderer",
    "format_timestamp",
    "ZoomClient",
    "setup_logging",
    "__version__",
]
