"""Storage abstraction for game snapshot persistence.

A snapshot is a plain JSON object. Only one snapshot is kept per store: the
latest save replaces the previous one and ``clear`` removes it. A store
that holds nothing, or holds something that cannot be read back as a JSON
object, reports ``None`` from ``load`` so the caller starts a fresh game.
"""

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger()

# Owner-only file permissions for snapshot files.
_SNAPSHOT_FILE_MODE = 0o600


class SnapshotStorage(Protocol):
    """Protocol for persisting the latest game snapshot."""

    def load(self) -> dict[str, Any] | None: ...

    def save(self, data: dict[str, Any]) -> None: ...

    def clear(self) -> None: ...


class LocalSnapshotStorage:
    """Stores the snapshot as a JSON file on the local filesystem.

    Writes go to a temporary file in the same directory and are renamed into
    place, so a crash mid-write never leaves a truncated snapshot behind.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> dict[str, Any] | None:
        if not self._file_path.exists():
            return None

        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (ValueError, OSError):
            logger.warning("unreadable snapshot file, ignoring", path=str(self._file_path), exc_info=True)
            return None

        if not isinstance(data, dict):
            logger.warning("snapshot file does not hold a JSON object, ignoring", path=str(self._file_path))
            return None
        return data

    def save(self, data: dict[str, Any]) -> None:
        """Atomically replace the snapshot file with ``data``."""
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(data, ensure_ascii=False).encode("utf-8")

        fd, tmp_path = tempfile.mkstemp(dir=self._file_path.parent, prefix=".snapshot_", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fchmod(f.fileno(), _SNAPSHOT_FILE_MODE)
            Path(tmp_path).replace(self._file_path)
        except BaseException:
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("saved snapshot", path=str(self._file_path))

    def clear(self) -> None:
        self._file_path.unlink(missing_ok=True)
        logger.debug("cleared snapshot", path=str(self._file_path))


class InMemorySnapshotStorage:
    """Keeps the snapshot in memory as serialized JSON.

    Serializing on save means callers get the same guarantees as the file
    store: later mutations of the saved dict do not leak into the stored copy,
    and non-JSON values fail at save time.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._content: str | None = None
        if data is not None:
            self.save(data)

    def load(self) -> dict[str, Any] | None:
        if self._content is None:
            return None
        return json.loads(self._content)

    def save(self, data: dict[str, Any]) -> None:
        self._content = json.dumps(data)

    def clear(self) -> None:
        self._content = None
