"""
Request handler for the recordings page

Every invocation re-authenticates, lists one page of recordings and renders
the page. Failures never escape ``handle()``: recognized ones map to their
fixed public message, anything else to a generic one, all as HTTP 500.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from zoomrecpage.config import Config
from zoomrecpage.exceptions import UNEXPECTED_ERROR_MESSAGE, ZoomRecPageError
from zoomrecpage.models import Meeting, parse_meetings
from zoomrecpage.recordings import RecordingSelector
from zoomrecpage.templates import PageRenderer
from zoomrecpage.zoom_client import ZoomClient

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def html(cls, body: str) -> "HttpResponse":
        return cls(200, body, {"Content-Type": HTML_CONTENT_TYPE})

    @classmethod
    def error(cls, message: str, status_code: int = 500) -> "HttpResponse":
        return cls(status_code, message, {"Content-Type": TEXT_CONTENT_TYPE})

    def as_tuple(self) -> tuple[str, int, dict[str, str]]:
        """(body, status, headers) as Flask and Functions Framework expect"""
        return self.body, self.status_code, dict(self.headers)


class RecordingsPageHandler:
    """Render the recordings page for the meeting named in ``config``"""

    def __init__(
        self,
        config: Config,
        client_factory: Callable[[Config], ZoomClient] = ZoomClient.from_config,
    ):
        self.config = config
        self.client_factory = client_factory

    def handle(self) -> HttpResponse:
        """Run one invocation; always returns a response"""
        return guarded(self.render)

    def __call__(self) -> HttpResponse:
        return self.handle()

    def load_meetings(self) -> list[Meeting]:
        """
        Authenticate, list recordings and keep the configured meeting

        Raises:
            MissingConfigError: Before any network call when settings are absent
            ConfigError: Invalid optional settings
            TokenRequestError: Token exchange failed
            RecordingsFetchError: Recordings list call failed
        """
        config = self.config
        config.validate()

        client = self.client_factory(config)
        access_token = client.get_access_token()
        payload = client.list_user_recordings(
            access_token, user_id=config.user_id, page_size=config.page_size
        )

        return RecordingSelector(config.display_mode).filter_meetings(
            parse_meetings(payload), config.meeting_id
        )

    def renderer(self) -> PageRenderer:
        return PageRenderer(
            title=self.config.page_title,
            timezone=self.config.timezone,
            mode=self.config.display_mode,
        )

    def render(self) -> str:
        """Fetch and render the page, raising on failure"""
        meetings = self.load_meetings()
        return self.renderer().render(self.config.meeting_id, meetings)


def guarded(render: Callable[[], str]) -> HttpResponse:
    """Turn a page render into a response, mapping every failure to a 500"""
    try:
        return HttpResponse.html(render())
    except ZoomRecPageError as e:
        logger.error(f"{e.message} [{e.code}]: {e.details}")
        return HttpResponse.error(e.public_message)
    except Exception as e:
        logger.exception(f"Unhandled error: {e}")
        return HttpResponse.error(UNEXPECTED_ERROR_MESSAGE)


def handle_request(
    environ: Mapping[str, str] | None = None,
    config_file: str | None = None,
    client_factory: Callable[[Config], ZoomClient] = ZoomClient.from_config,
) -> HttpResponse:
    """Load configuration and render, with config-file errors inside the same boundary"""

    def _render() -> str:
        config = Config(environ, config_file)
        return RecordingsPageHandler(config, client_factory).render()

    return guarded(_render)
