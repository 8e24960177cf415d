"""File-based storage for the local copy of the system document."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ..config import settings


class FileStorage:
    """Thin wrapper around the data root for reading and writing JSON documents."""

    def __init__(self, root: Path | None = None, file_name: str | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.path = self.root / (file_name or settings.fallback_file)

    def exists(self) -> bool:
        return self.path.exists()

    def read_json(self) -> Any:
        """Return the decoded document, or ``None`` when no copy has been written yet."""
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def write_json(self, data: Any, *, indent: int = 2) -> None:
        # Write beside the target and swap so a crash never leaves half a document.
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)
        os.replace(tmp_path, self.path)
