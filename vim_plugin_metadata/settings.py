import os
from typing import List

from pydantic import BaseModel, ConfigDict, field_validator

# Directories that can hold vimscript per `:help vimfiles`, plus instant/ which
# some plugin managers load before plugin/. Listed in traversal order.
DEFAULT_SECTIONS = [
    "plugin",
    "instant",
    "autoload",
    "syntax",
    "indent",
    "ftdetect",
    "ftplugin",
    "compiler",
    "spell",
    "lang",
    "colors",
]

# after/ only overrides behavior defined elsewhere, so it never carries metadata.
AFTER_DIR = "after"

ENV_PREFIX = "VIM_PLUGIN_METADATA_"


def _split_list(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class ScanSettings(BaseModel):
    """Controls which files of a plugin directory get parsed."""

    model_config = ConfigDict(frozen=True)

    sections: List[str] = DEFAULT_SECTIONS
    root_files: List[str] = ["menu.vim"]
    extensions: List[str] = [".vim"]
    excluded_dirs: List[str] = [AFTER_DIR]
    skip_hidden: bool = True
    max_depth: int = 20

    @field_validator("sections")
    @classmethod
    def drop_after_section(cls, value: List[str]) -> List[str]:
        return [section for section in value if section != AFTER_DIR]

    @field_validator("excluded_dirs")
    @classmethod
    def always_exclude_after(cls, value: List[str]) -> List[str]:
        if AFTER_DIR not in value:
            value = list(value) + [AFTER_DIR]
        return value

    @field_validator("extensions")
    @classmethod
    def dotted_extensions(cls, value: List[str]) -> List[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    @classmethod
    def from_env(cls) -> "ScanSettings":
        """Build settings, overriding defaults from VIM_PLUGIN_METADATA_* vars."""
        values = {}
        for field in ("sections", "extensions", "excluded_dirs"):
            raw = os.getenv(ENV_PREFIX + field.upper())
            if raw:
                values[field] = _split_list(raw)
        max_depth = os.getenv(ENV_PREFIX + "MAX_DEPTH")
        if max_depth:
            values["max_depth"] = int(max_depth)
        return cls(**values)
