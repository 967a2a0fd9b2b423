"""Persistence for the queue document (a single JSON file)."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional, Union

from infrastructure.errors import QueueConflictError, QueueCorruptError
from reservations.models import QueueData


def _version_of(raw: bytes) -> str:
    return hashlib.sha256(raw).hexdigest()


@dataclass
class QueueLoad:
    """Result of :meth:`QueueStore.load`."""

    data: QueueData
    version: str
    created: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.data.booking_requests and not self.data.processed_requests


class QueueStore:
    """Read/write the queue document with whole-file atomic replacement.

    There is exactly one writer per run. ``save`` compares the on-disk content
    with the version captured at load time and refuses to overwrite edits made
    in between.
    """

    def __init__(self, file_path: Union[str, Path], *, logger: Optional[logging.Logger] = None) -> None:
        self._path = Path(file_path)
        self._logger = logger or logging.getLogger("QueueStore")

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> QueueLoad:
        """Load the queue, writing an empty document when none exists yet."""

        if not self._path.exists():
            self._logger.info(
                "No booking queue file found at %s. Creating empty queue.", self._path
            )
            empty = QueueData()
            version = self._write(empty)
            return QueueLoad(data=empty, version=version, created=True)

        raw = self._path.read_bytes()
        try:
            payload = json.loads(raw.decode("utf-8"))
            data = QueueData.from_payload(payload)
        except (UnicodeDecodeError, ValueError) as exc:
            raise QueueCorruptError(f"Queue file {self._path} is not a valid queue document: {exc}") from exc

        self._logger.debug(
            "Loaded %s pending and %s processed requests from %s",
            len(data.booking_requests),
            len(data.processed_requests),
            self._path,
        )
        return QueueLoad(data=data, version=_version_of(raw))

    def save(self, data: QueueData, *, expected_version: Optional[str] = None) -> str:
        """Persist the complete document; returns the new version token."""

        if expected_version is not None:
            current = _version_of(self._path.read_bytes()) if self._path.exists() else None
            if current != expected_version:
                raise QueueConflictError(
                    f"Queue file {self._path} changed since it was loaded; refusing to overwrite"
                )
        version = self._write(data)
        self._logger.info(
            "Queue saved to %s (%s pending, %s processed)",
            self._path,
            len(data.booking_requests),
            len(data.processed_requests),
        )
        return version

    def _write(self, data: QueueData) -> str:
        encoded = json.dumps(data.to_payload(), indent=2, ensure_ascii=False).encode("utf-8")
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Optional[Path] = None
        try:
            with NamedTemporaryFile("wb", dir=self._path.parent, delete=False) as handle:
                tmp_path = Path(handle.name)
                handle.write(encoded)
                handle.flush()
            if self._path.exists():
                # temp files are created 0600; keep the queue file's own mode
                os.chmod(tmp_path, stat.S_IMODE(self._path.stat().st_mode))
            tmp_path.replace(self._path)
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise
        return _version_of(encoded)
