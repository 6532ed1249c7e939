"""
storyshape.tagger - External sentiment tagger boundary.

Sentence-level sentiment from a third-party process (Stanford CoreNLP's
SentimentPipeline). The core never assumes the tagger exists: a missing
installation is a DependencyError and a failed run is a TaggerError.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from storyshape.exceptions import DependencyError, TaggerError
from storyshape.logging import logger
from storyshape.validation import check_text_sequence

# "very" labels first so "positive" doesn't match "Very positive"
LABEL_VALUES: tuple[tuple[str, float], ...] = (
    ("very positive", 1.0),
    ("very negative", -1.0),
    ("positive", 0.5),
    ("neutral", 0.0),
    ("negative", -0.5),
)

SENTIMENT_PIPELINE = "edu.stanford.nlp.sentiment.SentimentPipeline"


class SentimentTagger(ABC):
    """Anything that assigns sentiment values to raw texts."""

    @abstractmethod
    def get_external_sentiment(self, texts: Sequence[str]) -> list[float]:
        """Return one value in [-1, 1] per sentence found in texts."""


def label_to_value(label: str) -> float:
    """Map a tagger label line to its numeric value.

    Raises:
        TaggerError: If the line carries no known label
    """
    normalized = " ".join(label.lower().split())
    for name, value in LABEL_VALUES:
        if normalized.endswith(name):
            return value
    raise TaggerError(f"Unrecognized sentiment label: {label!r}")


def parse_tagger_output(output: str) -> list[float]:
    """Parse SentimentPipeline output.

    The pipeline echoes each sentence on one line and prints its label
    on the next, so labels are on every second line.
    """
    lines = output.splitlines()
    if not lines:
        raise TaggerError("Tagger produced no output")
    return [label_to_value(line) for line in lines[1::2]]


class StanfordTagger(SentimentTagger):
    """Runs Stanford CoreNLP's SentimentPipeline through java."""

    def __init__(
        self,
        path: Path,
        memory: str = "5g",
        timeout: int = 600,
        java: str = "java",
    ) -> None:
        self.path = path
        self.memory = memory
        self.timeout = timeout
        self.java = java

    def check_available(self) -> str:
        """Return the java executable path.

        Raises:
            DependencyError: If the CoreNLP directory or java is missing
        """
        if not self.path.is_dir():
            raise DependencyError(
                "corenlp",
                f"Stanford CoreNLP directory not found: {self.path}",
                "Download CoreNLP from https://stanfordnlp.github.io/CoreNLP/",
            )
        java_path = shutil.which(self.java)
        if not java_path:
            raise DependencyError(
                "java",
                "Java runtime not found in PATH",
                "Install a JDK (e.g. apt install default-jre)",
            )
        return java_path

    def build_command(self, java_path: str, input_file: Path) -> list[str]:
        return [
            java_path,
            "-cp",
            "*",
            f"-Xmx{self.memory}",
            SENTIMENT_PIPELINE,
            "-file",
            str(input_file),
        ]

    def get_external_sentiment(self, texts: Sequence[str]) -> list[float]:
        """Tag texts with CoreNLP.

        Raises:
            DependencyError: If CoreNLP or java is unavailable
            TaggerError: If the process fails, times out, or its output
                cannot be parsed
        """
        texts = check_text_sequence(texts, "texts")
        java_path = self.check_available()

        with tempfile.TemporaryDirectory() as tmp_dir:
            input_file = Path(tmp_dir) / "text.txt"
            input_file.write_text("\n".join(texts) + "\n", encoding="utf-8")
            cmd = self.build_command(java_path, input_file)
            logger.debug("Running tagger: %s (cwd=%s)", " ".join(cmd), self.path)

            try:
                proc = subprocess.run(
                    cmd,
                    cwd=self.path,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise TaggerError(f"Tagger timed out after {self.timeout}s") from e
            except OSError as e:
                raise TaggerError(f"Failed to start tagger: {e}") from e

        if proc.returncode != 0:
            raise TaggerError(
                f"Tagger exited with code {proc.returncode}: {proc.stderr.strip()[:500]}"
            )
        return parse_tagger_output(proc.stdout)


def create_tagger_from_config(config: Any) -> StanfordTagger | None:
    """Create the external tagger from StoryshapeConfig, if one is configured."""
    tagger_path = config.sentiment.tagger_path
    if tagger_path is None:
        return None
    return StanfordTagger(Path(tagger_path))
