"""
Recording selector - picks the configured meeting and the files worth linking
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from zoomrecpage.models import Meeting, RecordingFile

HIDDEN_FILE_TYPES = frozenset({"SUMMARY", "CHAT"})
FILE_TYPE_RANK = {"MP4": 1, "M4A": 2}
DEFAULT_RANK = 99
FILE_TYPE_LABELS = {"MP4": "VIDEO", "M4A": "AUDIO"}


class DisplayMode(str, Enum):
    """How recording files are listed on the page"""

    DETAILED = "detailed"  # hide chat/summary, video before audio, friendly labels
    SIMPLE = "simple"  # every playable file, raw type and per-file timestamp


@dataclass(frozen=True)
class FileEntry:
    label: str
    url: str
    timestamp: str = ""


def parse_meeting_id(raw: str | None) -> int | None:
    """
    Parse the configured meeting ID for numeric comparison

    Integral forms such as ``"123"`` or ``"123.0"`` parse; anything else
    (``"123.5"``, ``"abc"``, ``"1_23"``, empty) yields None, which matches no
    meeting.
    """
    text = (raw or "").strip()
    # int() and float() accept digit-group underscores
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    return int(value) if value.is_integer() else None


def meeting_matches(meeting: Meeting, target_id: int | None) -> bool:
    if target_id is None:
        return False
    meeting_id = meeting.id
    # bool is an int subclass; strings never equal numbers
    if isinstance(meeting_id, bool) or not isinstance(meeting_id, int | float):
        return False
    return meeting_id == target_id


def file_label(file_type: str) -> str:
    return FILE_TYPE_LABELS.get(file_type, file_type)


def file_rank(recording_file: RecordingFile) -> int:
    return FILE_TYPE_RANK.get(recording_file.file_type, DEFAULT_RANK)


class RecordingSelector:
    """Select the meetings and files that end up on the page"""

    def __init__(self, mode: DisplayMode | str = DisplayMode.DETAILED) -> None:
        self.mode = DisplayMode(mode)
        self.logger = logging.getLogger(__name__)

    def filter_meetings(self, meetings: Iterable[Meeting], meeting_id: str | None) -> list[Meeting]:
        """Keep meetings whose numeric ID equals the configured one"""
        target = parse_meeting_id(meeting_id)
        if target is None:
            self.logger.warning(f"Configured meeting ID {meeting_id!r} is not numeric")
        matched = [m for m in meetings if meeting_matches(m, target)]
        self.logger.info(f"Matched {len(matched)} meeting(s) for meeting ID {meeting_id}")
        return matched

    def visible_files(self, meeting: Meeting) -> list[RecordingFile]:
        """Files in display order, before the playable-URL check"""
        files = list(meeting.recording_files)
        if self.mode is DisplayMode.SIMPLE:
            return files

        files = [f for f in files if f.file_type not in HIDDEN_FILE_TYPES]
        # sorted() is stable, so equal ranks keep API order
        return sorted(files, key=file_rank)

    def select_entries(
        self,
        meeting: Meeting,
        format_timestamp: Callable[[str | None], str] | None = None,
    ) -> list[FileEntry]:
        """
        Build the linked entries for one meeting

        Args:
            meeting: A matched meeting
            format_timestamp: Formats ``recording_start`` in simple mode

        Returns:
            One entry per file that has a playable URL
        """
        entries = []
        for recording_file in self.visible_files(meeting):
            if not recording_file.play_url:
                continue
            if self.mode is DisplayMode.SIMPLE:
                timestamp = format_timestamp(recording_file.recording_start) if format_timestamp else ""
                entries.append(
                    FileEntry(recording_file.file_type, recording_file.play_url, timestamp)
                )
            else:
                entries.append(
                    FileEntry(file_label(recording_file.file_type), recording_file.play_url)
                )
        return entries
