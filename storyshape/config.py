"""
storyshape.config - YAML config loading, profile merging, validation.

Handles loading storyshape.yaml, applying profile defaults, and
validating all parameters.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from storyshape.exceptions import ConfigError

CONFIG_FILENAME = "storyshape.yaml"
LEXICON_DIR_ENV = "STORYSHAPE_LEXICON_DIR"


class SentimentSettings(BaseModel):
    """How sentences are turned into raw sentiment values."""

    method: str = "syuzhet"
    language: str = "english"
    regex: str = "[^A-Za-z']+"
    lowercase: bool = True
    workers: int = Field(default=0, ge=0)
    custom_lexicon: Path | None = None
    tagger_path: Path | None = None

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        valid = {"syuzhet", "afinn", "bing", "nrc", "custom", "stanford"}
        if v not in valid:
            raise ValueError(f"method must be one of: {valid}")
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        return v.lower()


class TransformSettings(BaseModel):
    """Smoothing parameters for the narrative trajectory."""

    method: str = "dct"
    low_pass_size: int = Field(default=5, gt=0)
    out_len: int = Field(default=100, gt=0)
    padding_factor: int = Field(default=2, ge=0)
    scale: str = "none"

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        valid = {"dct", "fft"}
        if v not in valid:
            raise ValueError(f"transform method must be one of: {valid}")
        return v

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, v: str) -> str:
        valid = {"none", "range", "zscore"}
        if v not in valid:
            raise ValueError(f"scale must be one of: {valid}")
        return v


class StoryshapeConfig(BaseModel):
    """Resolved configuration for a Storyshape run."""

    profile: str = "default"
    lexicon_dir: Path | None = None

    sentiment: SentimentSettings = Field(default_factory=SentimentSettings)
    transform: TransformSettings = Field(default_factory=TransformSettings)

    config_path: Path | None = None

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v: str) -> str:
        if v not in BUILTIN_PROFILES:
            raise ValueError(f"profile must be one of: {set(BUILTIN_PROFILES)}")
        return v

    def resolved_lexicon_dir(self) -> Path | None:
        """Lexicon directory from the config, falling back to the environment."""
        if self.lexicon_dir is not None:
            return self.lexicon_dir
        env_dir = os.environ.get(LEXICON_DIR_ENV)
        return Path(env_dir) if env_dir else None


BUILTIN_PROFILES: dict[str, dict[str, Any]] = {
    "default": {
        "transform": {
            "method": "dct",
            "low_pass_size": 5,
            "out_len": 100,
            "scale": "none",
        },
    },
    "legacy": {
        "transform": {
            "method": "fft",
            "low_pass_size": 2,
            "out_len": 100,
            "padding_factor": 2,
            "scale": "none",
        },
    },
    "macro": {
        "transform": {
            "method": "dct",
            "low_pass_size": 3,
            "out_len": 100,
            "scale": "range",
        },
    },
}

_NESTED_SECTIONS = ("sentiment", "transform")


def load_profile(name: str) -> dict[str, Any]:
    """Return a deep copy of a built-in profile."""
    if name not in BUILTIN_PROFILES:
        raise ConfigError(f"Unknown profile: {name}")
    return {key: dict(value) for key, value in BUILTIN_PROFILES[name].items()}


def merge_config(file_config: dict[str, Any], profile: dict[str, Any]) -> dict[str, Any]:
    """Merge file config with profile defaults. File config takes precedence."""
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in profile.items()}
    for key, value in file_config.items():
        if key in _NESTED_SECTIONS and isinstance(value, dict):
            merged.setdefault(key, {})
            merged[key].update(value)
        elif value is not None:
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> StoryshapeConfig:
    """Load and validate configuration.

    Args:
        path: A storyshape.yaml file or the directory containing one
            (defaults to the current directory)

    Raises:
        FileNotFoundError: If no config file exists at the location
        ConfigError: If the file is not valid YAML or fails validation
    """
    config_file = path if path is not None else Path.cwd()
    if config_file.is_dir():
        config_file = config_file / CONFIG_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {config_file}")

    try:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    profile = load_profile(raw_config.get("profile", "default"))
    merged = merge_config(raw_config, profile)
    merged["config_path"] = config_file

    # relative lexicon paths are relative to the config file
    lexicon_dir = merged.get("lexicon_dir")
    if lexicon_dir and not Path(lexicon_dir).is_absolute():
        merged["lexicon_dir"] = config_file.parent / lexicon_dir

    return build_config(merged)


def build_config(values: dict[str, Any]) -> StoryshapeConfig:
    """Validate a merged config dict, converting pydantic errors."""
    try:
        return StoryshapeConfig(**values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def create_default_config(profile: str = "default") -> dict[str, Any]:
    """Create a default config for a new working directory."""
    defaults: dict[str, Any] = {
        "profile": profile,
        "lexicon_dir": None,
        "sentiment": {
            "method": "syuzhet",
            "language": "english",
            "workers": 0,
        },
    }
    return merge_config(defaults, load_profile(profile))


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
