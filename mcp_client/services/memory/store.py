"""JSON-file backed memory store used by the memory tools."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ...config import get_settings
from ...errors import MemoryStoreError
from ...logging_config import logger
from ...utils.timezones import convert_to_timezone, format_medium, resolve_timezone
from .models import MemoryRecord

_RECORDS = TypeAdapter(List[MemoryRecord])


class MemoryStore:
    """Stores memories as a single JSON array, rewritten in full on every save."""

    def __init__(self, path: Path, *, timezone_name: Optional[str] = None):
        self._path = path
        self._lock = threading.Lock()
        self._tz = resolve_timezone(timezone_name)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> List[MemoryRecord]:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("failed to read memory file", extra={"error": str(exc), "path": str(self._path)})
            return []

        if not raw.strip():
            return []
        try:
            return _RECORDS.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "memory file is corrupt; treating as empty",
                extra={"error": str(exc), "path": str(self._path)},
            )
            return []

    def _write(self, records: List[MemoryRecord]) -> None:
        data = _RECORDS.dump_json(records, indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".memory-", suffix=".json")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("memory write failed", extra={"error": str(exc), "path": str(self._path)})
            raise MemoryStoreError(f"Could not write memory file: {exc}") from exc

    def list_entries(self) -> List[MemoryRecord]:
        """Return every stored record in file order."""
        with self._lock:
            records = self._read()
        logger.debug("read memory entries", extra={"count": len(records)})
        return records

    def append_entry(self, text: str) -> MemoryRecord:
        """Append a record stamped with the current time."""
        record = MemoryRecord(content=text)
        with self._lock:
            records = self._read()
            records.append(record)
            self._write(records)
        logger.info("saved memory entry", extra={"count": len(records)})
        return record

    def format_timestamp(self, value: datetime) -> str:
        return format_medium(convert_to_timezone(value, self._tz))

    def clear(self) -> None:
        with self._lock:
            try:
                self._path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                raise MemoryStoreError(f"Could not clear memory file: {exc}") from exc
        logger.info("cleared memory store")


@lru_cache(maxsize=1)
def get_memory_store() -> MemoryStore:
    settings = get_settings()
    return MemoryStore(settings.memory_file, timezone_name=settings.timezone)


__all__ = ["MemoryStore", "get_memory_store"]
