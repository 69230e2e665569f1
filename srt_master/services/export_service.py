"""Export service for writing translated subtitle files."""

from collections.abc import Iterable
from pathlib import Path

from srt_master.models import SubtitleItem
from srt_master.utils import ensure_directory

DEFAULT_OUTPUT_NAME = "translated_subtitle.srt"


class ExportService:
    """Render subtitle items back to SRT (stateless service)."""

    def generate_srt(self, items: Iterable[SubtitleItem]) -> str:
        """Build SRT text from items.

        Each block uses the translated text when present, otherwise the
        original text. Blocks are joined by a single blank line.

        Args:
            items: Items in output order

        Returns:
            SRT file contents
        """
        return "\n\n".join(
            f"{item.id}\n{item.start_time} --> {item.end_time}\n{item.output_text}"
            for item in items
        )

    def export_srt(self, items: Iterable[SubtitleItem], output_path: Path) -> int:
        """Write items to an SRT file.

        Args:
            items: Items in output order
            output_path: Destination file

        Returns:
            Number of subtitle blocks written
        """
        items = list(items)
        ensure_directory(output_path.parent)
        output_path.write_text(self.generate_srt(items) + "\n", encoding="utf-8")
        return len(items)

    @staticmethod
    def default_output_path(subtitle_file: Path, target_lang: str | None = None) -> Path:
        """Pick an output path next to the source file.

        Args:
            subtitle_file: Source subtitle file
            target_lang: Target language used as a filename tag

        Returns:
            ``<stem>.<lang>.srt`` or ``translated_subtitle.srt`` in the same folder
        """
        if not target_lang:
            return subtitle_file.parent / DEFAULT_OUTPUT_NAME
        tag = "".join(c for c in target_lang.lower() if c.isalnum()) or "translated"
        return subtitle_file.with_name(f"{subtitle_file.stem}.{tag}.srt")
