"""
Meeting and recording-file records built from the Zoom recordings payload
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RecordingFile:
    file_type: str = ""
    play_url: str | None = None
    recording_start: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecordingFile":
        return cls(
            file_type=str(data.get("file_type") or ""),
            play_url=data.get("play_url") or None,
            recording_start=data.get("recording_start") or None,
        )


@dataclass(frozen=True)
class Meeting:
    id: Any = None
    topic: str | None = None
    start_time: str | None = None
    recording_files: list[RecordingFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Meeting":
        """Build a meeting; a null or missing ``recording_files`` becomes empty"""
        files = data.get("recording_files") or []
        return cls(
            id=data.get("id"),
            topic=data.get("topic"),
            start_time=data.get("start_time"),
            recording_files=[RecordingFile.from_dict(f) for f in files],
        )


def parse_meetings(payload: dict[str, Any]) -> list[Meeting]:
    """Meetings from a ``/users/{userId}/recordings`` response body"""
    meetings = payload.get("meetings") or []
    return [Meeting.from_dict(m) for m in meetings]
