"""Loader settings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderConfig:
    # utf-8-sig tolerates a leading BOM
    encoding: str = "utf-8-sig"
    skip_blank_lines: bool = True
    allow_negative_age: bool = False


DEFAULT_LOADER_CONFIG = LoaderConfig()
