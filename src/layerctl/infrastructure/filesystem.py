"""Filesystem helpers for whole-file JSON documents.

INVARIANT: Readers never observe a half-written file. Writes go to a
temporary sibling file which is flushed, fsynced, and then renamed over
the target with :func:`os.replace` (atomic on POSIX and Windows when
both paths share a directory).
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json_document(path: Path) -> Any | None:
    """Parse the JSON document at *path*.

    Returns None when the file does not exist. Undecodable bytes and
    malformed JSON raise ValueError; other I/O failures raise OSError.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    if not raw.strip():
        return None
    return json.loads(raw)


def write_json_atomic(path: Path, payload: Any) -> None:
    """Serialize *payload* and atomically replace *path* with it.

    Creates parent directories as needed. On any failure the temporary
    file is removed and the original file is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = json.dumps(payload, indent=2) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(rendered)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
