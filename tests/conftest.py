"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from storyshape.lexicon.tables import clear_lexicon_cache

SYUZHET_CSV = """word,value
love,0.75
loved,0.75
lover,0.5
happy,0.75
wellbeing,0.5
hate,-0.75
hated,-0.75
despise,-1
silly,-0.25
"""

AFINN_CSV = """word,value
love,3
happy,3
hate,-3
despise,-3
"""

BING_CSV = """word,sentiment,value
love,positive,1
happy,positive,1
hate,negative,-1
silly,negative,-1
"""

NRC_CSV = """lang,word,sentiment,value
english,love,positive,1
english,love,joy,1
english,happy,positive,1
english,happy,joy,1
english,happy,trust,1
english,hate,negative,1
english,hate,anger,1
english,hate,disgust,1
english,fear,negative,1
english,fear,fear,1
spanish,amor,positive,1
spanish,amor,joy,1
spanish,odio,negative,1
"""

SAMPLE_TEXT = (
    "I love the beginning of this story. "
    "The hero is happy and full of love. "
    "Then the villain arrives and I hate him. "
    "I despise what he does to the town. "
    "It is a silly plot twist! "
    "In the end the lovers are happy again. "
    "I loved it."
)


@pytest.fixture(autouse=True)
def _fresh_lexicon_cache(monkeypatch: pytest.MonkeyPatch):
    """Isolate the process-wide lexicon cache and environment per test."""
    monkeypatch.delenv("STORYSHAPE_LEXICON_DIR", raising=False)
    clear_lexicon_cache()
    yield
    clear_lexicon_cache()


@pytest.fixture
def lexicon_dir(tmp_path: Path) -> Path:
    """Create a directory with small built-in lexicon tables."""
    directory = tmp_path / "lexicons"
    directory.mkdir()
    (directory / "syuzhet.csv").write_text(SYUZHET_CSV, encoding="utf-8")
    (directory / "afinn.csv").write_text(AFINN_CSV, encoding="utf-8")
    (directory / "bing.csv").write_text(BING_CSV, encoding="utf-8")
    (directory / "nrc.csv").write_text(NRC_CSV, encoding="utf-8")
    return directory


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def sample_text_file(tmp_path: Path) -> Path:
    """Write the sample story over several lines."""
    path = tmp_path / "story.txt"
    path.write_text(SAMPLE_TEXT.replace(". ", ".\n"), encoding="utf-8")
    return path


@pytest.fixture
def sample_config_dict(lexicon_dir: Path) -> dict:
    """Return a sample configuration dictionary."""
    return {
        "profile": "default",
        "lexicon_dir": str(lexicon_dir),
        "sentiment": {
            "method": "syuzhet",
            "language": "english",
            "workers": 0,
        },
        "transform": {
            "low_pass_size": 3,
            "out_len": 20,
        },
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config_dict: dict) -> Path:
    """Write a storyshape.yaml into a temporary directory."""
    path = tmp_path / "storyshape.yaml"
    with open(path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return path
