"""Service for parsing subtitle files into subtitle items."""

import logging
import re
from pathlib import Path

import pysubs2
from pysubs2.time import ms_to_times

from srt_master.exceptions import SubtitleParseError
from srt_master.models import SubtitleItem
from srt_master.utils import read_text_file

logger = logging.getLogger(__name__)

TIMECODE_PATTERN = re.compile(r"(\d{2}:\d{2}:\d{2},\d{3})\s-->\s(\d{2}:\d{2}:\d{2},\d{3})")
BLOCK_SEPARATOR = re.compile(r"\n\n+")
ID_PATTERN = re.compile(r"[0-9]+")


class SubtitleParserService:
    """Parse subtitle files into SubtitleItem lists (stateless service)."""

    def parse_srt(self, content: str) -> list[SubtitleItem]:
        """Parse SRT text.

        Each block is an id line, a ``HH:MM:SS,mmm --> HH:MM:SS,mmm`` line
        and one or more text lines. Malformed blocks (bad id, unmatched
        timecode, empty text) are skipped, as are repeated ids.

        Args:
            content: Raw SRT file contents

        Returns:
            List of pending SubtitleItem objects in file order
        """
        normalized = content.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")

        items = []
        seen_ids: set[int] = set()
        for block in BLOCK_SEPARATOR.split(normalized):
            item = self._parse_block(block)
            if item is None:
                continue
            if item.id in seen_ids:
                logger.warning(f"Skipping repeated subtitle id {item.id}")
                continue
            seen_ids.add(item.id)
            items.append(item)

        return items

    def parse_file(self, subtitle_file: Path) -> list[SubtitleItem]:
        """Parse a subtitle file.

        ``.srt`` files are read with the block grammar of ``parse_srt``.
        Other formats (.ass, .ssa, .vtt, ...) are loaded with pysubs2 and
        numbered sequentially.

        Args:
            subtitle_file: Path to the subtitle file

        Returns:
            List of pending SubtitleItem objects

        Raises:
            SubtitleParseError: If the file cannot be read or parsed
        """
        if not subtitle_file.exists():
            raise SubtitleParseError(f"Subtitle file not found: {subtitle_file}")

        if subtitle_file.suffix.lower() == ".srt":
            try:
                content = read_text_file(subtitle_file)
            except OSError as e:
                raise SubtitleParseError(f"Failed to read subtitle file: {e}") from e
            return self.parse_srt(content)

        try:
            subs = pysubs2.load(str(subtitle_file))
        except Exception as e:
            raise SubtitleParseError(f"Failed to parse subtitle file: {e}") from e

        items = []
        for line in subs:
            if line.is_comment:
                continue
            text = line.plaintext.strip()
            if not text:
                continue
            items.append(
                SubtitleItem(
                    id=len(items) + 1,
                    start_time=format_timestamp(line.start),
                    end_time=format_timestamp(line.end),
                    original_text=text,
                )
            )

        logger.debug(f"Loaded {len(items)} lines from {subtitle_file.name} via pysubs2")
        return items

    def _parse_block(self, block: str) -> SubtitleItem | None:
        """Parse a single SRT block, or return None if it is malformed."""
        lines = block.strip("\n").split("\n")
        if len(lines) < 3:
            return None

        id_line = lines[0].strip()
        if not ID_PATTERN.fullmatch(id_line):
            return None
        item_id = int(id_line)
        if item_id < 1:
            return None

        match = TIMECODE_PATTERN.search(lines[1])
        if not match:
            return None

        text = "\n".join(lines[2:]).strip()
        if not text:
            return None

        return SubtitleItem(
            id=item_id,
            start_time=match.group(1),
            end_time=match.group(2),
            original_text=text,
        )


def format_timestamp(ms: int) -> str:
    """Format milliseconds as an SRT timestamp (HH:MM:SS,mmm)."""
    h, m, s, ms = ms_to_times(max(0, ms))
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"
