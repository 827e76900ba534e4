"""Tests for ID generation."""

from datetime import datetime, timezone

from a2ui.core.id import Prefix, extract_timestamp, generate_prefixed, new_batch_id, new_session_id


class TestGeneration:
    """Test basic ID generation."""

    def test_unique(self):
        assert new_batch_id() != new_batch_id()

    def test_prefixes(self):
        assert new_batch_id().startswith(f"{Prefix.BATCH}_")
        assert new_session_id().startswith(f"{Prefix.SESSION}_")

    def test_ulid_length(self):
        assert len(generate_prefixed("x").split("_", 1)[1]) == 26


class TestTimestamp:
    """Test timestamp extraction."""

    def test_recent(self):
        ts = extract_timestamp(new_batch_id())
        assert ts is not None
        assert abs((datetime.now(timezone.utc) - ts).total_seconds()) < 60

    def test_invalid(self):
        assert extract_timestamp("batch_not-a-ulid") is None
