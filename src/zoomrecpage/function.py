"""
HTTP function entry point

Deploy with ``functions-framework --source src/zoomrecpage/function.py
--target recordings``. The request itself is ignored: any method or path
renders the page for the configured meeting.
"""

from collections.abc import Mapping

import functions_framework
from flask import Request

from zoomrecpage.config import Config
from zoomrecpage.handler import handle_request
from zoomrecpage.logger import setup_logging


def configure_logging(environ: Mapping[str, str] | None = None) -> None:
    """Set up logging at the configured LOG_LEVEL"""
    setup_logging(Config(environ).log_level)


configure_logging()


@functions_framework.http
def recordings(request: Request) -> tuple[str, int, dict[str, str]]:
    """Render the recordings page"""
    return handle_request().as_tuple()
