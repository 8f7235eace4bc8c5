"""Configuration for the private preprocessor.

Read from the ``[preprocessor.private]`` table of ``book.toml``, either
through the context mdBook passes on stdin or directly from the file.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

PREPROCESSOR_NAME = "private"

DEFAULT_NOTICE = "CONFIDENTIAL"
DEFAULT_CHAPTER_PREFIX = "_"


@dataclass(frozen=True)
class PrivateConfig:
    """Options controlling how private content is handled."""

    remove: bool = False
    style: bool = True
    notice: str = DEFAULT_NOTICE
    chapter_prefix: str = DEFAULT_CHAPTER_PREFIX

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PrivateConfig":
        """Create a PrivateConfig from the preprocessor's config table.

        Unknown keys are ignored and missing keys take their defaults.
        Values are used as given.
        """
        data = data or {}
        return cls(
            remove=data.get("remove", False),
            style=data.get("style", True),
            notice=data.get("notice", DEFAULT_NOTICE),
            chapter_prefix=data.get("chapter_prefix", DEFAULT_CHAPTER_PREFIX),
        )

    @classmethod
    def from_book_config(cls, book_config: dict[str, Any]) -> "PrivateConfig":
        """Pick the ``preprocessor.private`` table out of a full book config."""
        preprocessors = book_config.get("preprocessor") or {}
        return cls.from_dict(preprocessors.get(PREPROCESSOR_NAME))

    @classmethod
    def from_context(cls, context: dict[str, Any]) -> "PrivateConfig":
        """Create a PrivateConfig from the preprocessor context mdBook sends."""
        return cls.from_book_config(context.get("config") or {})

    @classmethod
    def load(cls, path: Path) -> "PrivateConfig":
        """Load configuration from a ``book.toml`` file.

        Args:
            path: Path to book.toml.

        Returns:
            Loaded configuration.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid TOML.
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

        return cls.from_book_config(data)
