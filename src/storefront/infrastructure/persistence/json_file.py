"""Shared file helpers for the JSON-backed repositories.

Each repository owns one file and one lock; every read-modify-write cycle
runs under that lock so conditional updates are atomic within a process.
Writes go to a uniquely named temp file beside the target and are moved
into place, so no two writers ever share a temp path.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any


class JsonFile:

    def __init__(self, file_path: Path, empty: Any) -> None:
        self.path = file_path
        self.lock = threading.RLock()
        self._empty = empty
        self._ensure_file()

    def load(self) -> Any:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, data: Any) -> None:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp.write(json.dumps(data, indent=2) + "\n")
        try:
            os.replace(tmp.name, self.path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._empty), encoding="utf-8")
