# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Atomic file replacement."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` so readers see the old or the new file.

    The content goes to a temporary file in the destination directory, which
    is then moved over the target with ``os.replace``. Parent directories
    are created. Newlines are written as-is.

    Raises:
        OSError: If any step fails; the temporary file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = ["write_text_atomic"]
