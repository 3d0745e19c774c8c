"""
Unit tests for the card publisher service.

Tests cover:
- Filesystem publishing (directories, contents, permissions)
- Atomic replacement of an existing card
- Error handling for unwritable destinations
- Checksum format
"""

import hashlib
import stat
import sys

import pytest

from streak_card.core.errors import PublishError
from streak_card.services.card_publisher import FilesystemPublisher, compute_checksum


class TestChecksum:
    """Tests for card checksums."""

    @pytest.mark.anyio
    async def test_checksum_format(self):
        """Test checksums are prefixed sha256 hex digests."""
        data = b"<svg/>"
        assert compute_checksum(data) == f"sha256:{hashlib.sha256(data).hexdigest()}"


class TestFilesystemPublisher:
    """Tests for writing the card to disk."""

    @pytest.mark.anyio
    async def test_publish_creates_directory_and_file(self, tmp_path):
        """Test parent directories are created and UTF-8 content written."""
        target = tmp_path / "assets" / "cards" / "streak.svg"

        path = FilesystemPublisher().publish("<svg>🔥</svg>\n", target)

        assert path == target.resolve()
        assert target.read_text(encoding="utf-8") == "<svg>🔥</svg>\n"

    @pytest.mark.anyio
    async def test_publish_replaces_existing_card(self, tmp_path):
        """Test an existing card is overwritten."""
        target = tmp_path / "streak.svg"
        target.write_text("old", encoding="utf-8")

        FilesystemPublisher().publish("new", target)

        assert target.read_text(encoding="utf-8") == "new"

    @pytest.mark.anyio
    async def test_no_temporary_files_left_behind(self, tmp_path):
        """Test only the card remains after publishing."""
        FilesystemPublisher().publish("<svg/>", tmp_path / "streak.svg")
        assert [p.name for p in tmp_path.iterdir()] == ["streak.svg"]

    @pytest.mark.anyio
    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    async def test_published_card_is_world_readable(self, tmp_path):
        """Test the card is written with 0644 permissions."""
        target = tmp_path / "streak.svg"
        FilesystemPublisher().publish("<svg/>", target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    @pytest.mark.anyio
    async def test_unwritable_destination_raises_publish_error(self, tmp_path):
        """Test OS errors become PublishError."""
        # parent "directory" is a regular file
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(PublishError) as exc_info:
            FilesystemPublisher().publish("<svg/>", blocker / "streak.svg")
        assert exc_info.value.details["path"].endswith("streak.svg")
