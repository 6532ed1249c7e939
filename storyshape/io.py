"""
storyshape.io - Text and JSON read/write helpers, atomic file writes.

Centralized I/O utilities for the CLI and lexicon loaders.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any


def read_text(path: Path) -> str:
    """Read text file with UTF-8 encoding.

    Args:
        path: Path to text file

    Returns:
        File contents as string
    """
    with open(path, encoding="utf-8") as f:
        return f.read()


def get_text_as_string(path: Path) -> str:
    """Load a text file as a single string with its lines joined by spaces.

    Line breaks inside a paragraph carry no meaning for sentence
    splitting, so they are flattened before tokenization.
    """
    return " ".join(read_text(path).splitlines())


def read_json(path: Path) -> Any:
    """Read JSON file with UTF-8 encoding.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON file atomically with pretty formatting.

    Writes to a temp file first, then renames to prevent corruption
    on interruption.

    Args:
        path: Destination path for JSON file
        data: Data to write
        indent: Indentation level for pretty printing (default: 2)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            json.dump(data, tmp, indent=indent, ensure_ascii=False)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)
