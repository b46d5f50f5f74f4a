"""
Page rendering: timestamp formatting and the Jinja2 recordings template
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from jinja2 import Environment, PackageLoader

from zoomrecpage.models import Meeting
from zoomrecpage.recordings import DisplayMode, FileEntry, RecordingSelector

DEFAULT_TIMEZONE = "America/Mexico_City"
NO_RECORDINGS_MESSAGE = "No recordings found yet for this meeting."

logger = logging.getLogger(__name__)


def format_timestamp(iso_string: str | None, timezone: str = DEFAULT_TIMEZONE) -> str:
    """
    Format a Zoom ISO-8601 timestamp for display, e.g. ``Nov 5, 2025, 3:07 PM``

    Empty input gives an empty string. Unparseable input is logged and also
    gives an empty string. Timestamps without an offset are taken as UTC.
    """
    if not iso_string:
        return ""

    try:
        # Parse ISO format: 2025-09-30T12:00:35Z
        dt = datetime.fromisoformat(iso_string.strip().replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        # Dates at the edge of the supported range overflow on conversion
        local = dt.astimezone(ZoneInfo(timezone))
    except (ValueError, TypeError, AttributeError, OverflowError) as e:
        logger.warning(f"Failed to parse timestamp '{iso_string}': {e}. Using empty string.")
        return ""

    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M} {meridiem}"


@dataclass
class MeetingBlock:
    start_time: str
    topic: str | None
    entries: list[FileEntry] = field(default_factory=list)


class PageRenderer:
    """Render the recordings page for one meeting ID"""

    template_name = "recordings.html.j2"

    def __init__(
        self,
        title: str,
        timezone: str = DEFAULT_TIMEZONE,
        mode: DisplayMode | str = DisplayMode.DETAILED,
    ):
        self.title = title
        self.timezone = timezone
        self.mode = DisplayMode(mode)
        self.selector = RecordingSelector(self.mode)
        self.env = Environment(
            loader=PackageLoader("zoomrecpage", "html"),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def format_timestamp(self, iso_string: str | None) -> str:
        return format_timestamp(iso_string, self.timezone)

    def build_blocks(self, meetings: list[Meeting]) -> list[MeetingBlock]:
        return [
            MeetingBlock(
                start_time=self.format_timestamp(meeting.start_time),
                topic=meeting.topic,
                entries=self.selector.select_entries(meeting, self.format_timestamp),
            )
            for meeting in meetings
        ]

    def render(self, meeting_id: str, meetings: list[Meeting]) -> str:
        """
        Render the full HTML document

        Args:
            meeting_id: Configured meeting ID, echoed verbatim in the subtitle
            meetings: Meetings already filtered to the configured ID
        """
        template = self.env.get_template(self.template_name)
        return template.render(
            title=self.title,
            meeting_id=meeting_id,
            blocks=self.build_blocks(meetings),
            detailed=self.mode is DisplayMode.DETAILED,
            no_recordings_message=NO_RECORDINGS_MESSAGE,
        )
