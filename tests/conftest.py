"""Pytest configuration and shared fixtures."""

import pytest

from srt_master.config import create_default_config
from srt_master.exceptions import ModelClientError
from srt_master.models import ContextSuggestion, SubtitleItem, SubtitleStore, Translation
from srt_master.presenters import NullPresenter, NullProgressCallback
from srt_master.services import LogSink


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def test_config():
    """Provide a test configuration with no delay and a fixed API key."""
    return create_default_config(
        api_key="test-key",
        inter_batch_delay=0,
        batch_size=10,
        pro_allocation=30,
    )


@pytest.fixture
def null_presenter():
    """Provide a null presenter for testing (no output)."""
    return NullPresenter()


@pytest.fixture
def null_progress():
    """Provide a null progress callback for testing."""
    return NullProgressCallback()


@pytest.fixture
def log_sink():
    """Provide a log sink without a presenter."""
    return LogSink()


def make_subtitle_items(count, start_id=1):
    """Build ``count`` pending items with sequential ids."""
    return [
        SubtitleItem(
            id=i,
            start_time=f"00:00:{i % 60:02d},000",
            end_time=f"00:00:{i % 60:02d},900",
            original_text=f"Line {i}",
        )
        for i in range(start_id, start_id + count)
    ]


@pytest.fixture
def make_item():
    """Factory fixture for creating SubtitleItem instances with sensible defaults."""

    def _make(
        id=1,
        start_time="00:00:01,000",
        end_time="00:00:02,500",
        original_text="Hello there.",
        **kwargs,
    ):
        return SubtitleItem(
            id=id,
            start_time=start_time,
            end_time=end_time,
            original_text=original_text,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_store():
    """Factory fixture for a store holding ``count`` sequential items."""

    def _make(count=25):
        return SubtitleStore(make_subtitle_items(count))

    return _make


class FakeModelClient:
    """A real ModelClient implementation with scripted replies.

    Translations are ``"<tier>:<source text>"`` unless overridden. Calls are
    recorded for assertion.
    """

    def __init__(self, suggestions=None):
        self.suggestions = dict(suggestions or {})
        self.context_error = None
        self.fail_tiers = set()  # tiers whose translate call raises
        self.fail_all_translations = False
        self.drop_ids = set()  # ids left out of translate replies
        self.context_calls = []
        self.translate_calls = []

    def check_context(self, items, config):
        self.context_calls.append([item.id for item in items])
        if self.context_error is not None:
            raise self.context_error
        return [
            ContextSuggestion(id=item.id, suggestion=self.suggestions[item.id])
            for item in items
            if item.id in self.suggestions
        ]

    def translate(self, items, config, tier):
        self.translate_calls.append(([item.id for item in items], tier))
        if self.fail_all_translations or tier in self.fail_tiers:
            raise ModelClientError(f"{tier.value} model unavailable", status_code=503)
        return [
            Translation(id=item.id, translated_text=f"{tier.value}:{item.source_text}")
            for item in items
            if item.id not in self.drop_ids
        ]

    def tiers_for(self, ids):
        """Get the tiers used by translate calls covering any of ``ids``."""
        return [tier for call_ids, tier in self.translate_calls if set(call_ids) & set(ids)]


@pytest.fixture
def fake_client():
    """Provide a scripted model client."""
    return FakeModelClient()


class RecordingProgress:
    """A real ProgressCallback implementation that records all calls for assertion."""

    def __init__(self):
        self.starts = []
        self.progresses = []
        self.completes = 0
        self.errors = []

    def on_start(self, total: int, description: str) -> None:
        self.starts.append((total, description))

    def on_progress(self, current: int, item_description: str) -> None:
        self.progresses.append((current, item_description))

    def on_complete(self) -> None:
        self.completes += 1

    def on_error(self, item_description: str, error_message: str) -> None:
        self.errors.append((item_description, error_message))


@pytest.fixture
def recording_progress():
    """Provide a progress callback that records all calls for assertion."""
    return RecordingProgress()


class FixedRandom:
    """Random source returning a fixed sequence of draws in [0, 1)."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def sample_srt_content():
    """Provide sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:03,000
The crane lifted the beam.

2
00:00:04,000 --> 00:00:06,500
He reached the foundation stage
of cultivation.

3
00:00:07,000 --> 00:00:09,000
Good morning.
"""


@pytest.fixture
def sample_srt_file(temp_dir, sample_srt_content):
    """Create a sample SRT file for testing."""
    subtitle_file = temp_dir / "episode01.srt"
    subtitle_file.write_text(sample_srt_content, encoding="utf-8")
    return subtitle_file


@pytest.fixture
def sample_ass_content():
    """Provide sample ASS content for testing."""
    return """[Script Info]
Title: Test Subtitle
ScriptType: v4.00+

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: Default,Arial,20,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,0,0,0,0,100,100,0,0,1,2,2,2,10,10,10,1

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:01.00,0:00:03.00,Default,,0,0,0,,First line
Comment: 0,0:00:03.50,0:00:04.00,Default,,0,0,0,,Translator note
Dialogue: 0,0:00:04.00,0:00:06.50,Default,,0,0,0,,{\\i1}Second{\\i0} line
Dialogue: 0,0:01:07.25,0:01:09.00,Default,,0,0,0,,Third line
"""


@pytest.fixture
def sample_ass_file(temp_dir, sample_ass_content):
    """Create a sample ASS subtitle file for testing."""
    subtitle_file = temp_dir / "episode01.ass"
    subtitle_file.write_text(sample_ass_content, encoding="utf-8")
    return subtitle_file


@pytest.fixture
def fixed_random():
    """Factory fixture for random sources with scripted draws."""
    return FixedRandom
