"""
Card Publisher Service

Writes the rendered SVG card to the filesystem.

The write is atomic: the card is written to a temporary sibling file and
moved into place, so a reader (or a CI step committing the file) never
sees a half-written card.
"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from streak_card.core.errors import PublishError

logger = logging.getLogger(__name__)


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum of data.

    Returns:
        SHA-256 checksum in format: sha256:<lowercase-hex>
    """
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


class FilesystemPublisher:
    """Filesystem storage backend for rendered cards."""

    def publish(self, svg: str, path: str | Path) -> Path:
        """
        Write the card to `path`, creating parent directories.

        Args:
            svg: SVG document text
            path: Destination file path

        Returns:
            Resolved destination path

        Raises:
            PublishError: If the file cannot be written
        """
        target = Path(path)
        data = svg.encode("utf-8")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(data)
                # mkstemp creates 0600
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PublishError(
                f"Failed to write card to {target}: {e}",
                details={"path": str(target)},
            ) from e

        resolved = target.resolve()
        logger.info(
            f"Published card to filesystem: {resolved} ({len(data)} bytes)",
            extra={"checksum": compute_checksum(data)},
        )
        return resolved
