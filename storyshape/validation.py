"""
storyshape.validation - Input checks and environment validation.

Validates numeric inputs before any transform runs, and checks the
environment (lexicon files, Java runtime) for the doctor command.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np

from storyshape.exceptions import (
    DependencyError,
    InvalidInputError,
    InvalidParameterError,
)

BUILTIN_LEXICON_FILES = {
    "syuzhet": "syuzhet.csv",
    "afinn": "afinn.csv",
    "bing": "bing.csv",
    "nrc": "nrc.csv",
}


def as_numeric_array(values: Any, name: str = "values") -> np.ndarray:
    """Copy a numeric sequence into a 1-D float array.

    Raises:
        InvalidInputError: If values is a string, not numeric, not 1-D,
            empty, or contains NaN/inf
    """
    if isinstance(values, (str, bytes)):
        raise InvalidInputError(f"{name} must be a numeric sequence, not text")
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a numeric sequence: {e}") from e

    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInputError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} must contain only finite numbers")
    return arr


def check_positive_int(value: Any, name: str) -> int:
    """Validate a strictly positive integer parameter."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return int(value)


def check_text_sequence(texts: Any, name: str = "texts") -> list[str]:
    """Validate a sequence of strings (a bare string is rejected)."""
    if isinstance(texts, (str, bytes)) or not isinstance(texts, Sequence):
        raise InvalidInputError(f"{name} must be a sequence of strings")
    for item in texts:
        if not isinstance(item, str):
            raise InvalidInputError(
                f"{name} must contain only strings, got {type(item).__name__}"
            )
    return list(texts)


def check_lexicon_dir(lexicon_dir: Path | None) -> dict[str, bool]:
    """Report which built-in lexicon files are present.

    Returns:
        Dict mapping lexicon name to whether its CSV file exists
    """
    if lexicon_dir is None or not lexicon_dir.is_dir():
        return {name: False for name in BUILTIN_LEXICON_FILES}
    return {
        name: (lexicon_dir / filename).is_file()
        for name, filename in BUILTIN_LEXICON_FILES.items()
    }


def check_java() -> dict[str, str]:
    """Check that a Java runtime is installed and get its version.

    Returns:
        Dict with 'java_path' and 'java_version'

    Raises:
        DependencyError: If java is not found
    """
    java_path = shutil.which("java")
    if not java_path:
        raise DependencyError(
            "java",
            "Java runtime not found in PATH",
            "Install a JDK (e.g. apt install default-jre) to use the stanford method",
        )

    result = {"java_path": java_path}
    try:
        proc = subprocess.run(
            [java_path, "-version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        # java prints its version banner on stderr
        version_line = (proc.stderr or proc.stdout).split("\n")[0]
        result["java_version"] = version_line.split('"')[1] if '"' in version_line else "unknown"
    except (subprocess.TimeoutExpired, IndexError):
        result["java_version"] = "unknown"

    return result


def check_tagger_dir(path: Path | None) -> dict[str, Any]:
    """Check that a CoreNLP installation directory looks usable."""
    if path is None:
        return {"valid": False, "error": "No tagger path configured"}
    if not path.is_dir():
        return {"valid": False, "error": f"Not a directory: {path}"}
    jars = sorted(p.name for p in path.glob("*.jar"))
    if not jars:
        return {"valid": False, "error": f"No .jar files in {path}"}
    return {"valid": True, "jar_count": len(jars)}
