"""ISO-8601 (``PT#H#M#S``) duration handling for YouTube content details."""

import re

_HOURS = re.compile(r"(\d+)H")
_MINUTES = re.compile(r"(\d+)M")
_SECONDS = re.compile(r"(\d+)S")
_VALID = re.compile(r"^PT(?:\d+H)?(?:\d+M)?(?:\d+S)?$")


class YoutubeDurationParser:

    @staticmethod
    def parse_to_seconds(duration: str) -> int:
        """Anything not starting with ``PT`` counts as zero seconds."""
        if not duration or not duration.startswith("PT"):
            return 0

        time_part = duration[2:]
        total = 0
        for pattern, factor in ((_HOURS, 3600), (_MINUTES, 60), (_SECONDS, 1)):
            match = pattern.search(time_part)
            if match:
                total += int(match.group(1)) * factor
        return total

    @staticmethod
    def format_seconds(seconds: int) -> str:
        hours, minutes, secs = seconds // 3600, seconds % 3600 // 60, seconds % 60
        if hours > 0:
            return f"{hours}:{minutes:02d}:{secs:02d}"
        return f"{minutes}:{secs:02d}"

    @staticmethod
    def is_valid_duration(duration: str) -> bool:
        return bool(duration) and _VALID.match(duration) is not None
