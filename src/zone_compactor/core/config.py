"""
Settings loader & schema for the zone compactor.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml  # type: ignore
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


DEFAULT_NAME_WIDTH = 40


class CompactorSettings(BaseModel):
    """Index layout, output naming and manifest policies."""

    name_width: int = Field(
        DEFAULT_NAME_WIDTH,
        ge=2,
        le=255,
        description="Bytes reserved for a zone name in each index record, terminator included",
    )
    data_filename: str = Field("zoneinfo.dat", min_length=1, description="Blob artifact name")
    index_filename: str = Field("zoneinfo.idx", min_length=1, description="Index artifact name")
    version_filename: str = Field(
        "zoneinfo.version", min_length=1, description="Version marker artifact name"
    )
    blank_lines: Literal["skip", "error", "zone"] = Field(
        default="skip",
        description="Blank manifest lines: skip them, reject them, or read them as a zone name",
    )
    long_names: Literal["error", "truncate"] = Field(
        default="error",
        description="Names that do not fit the name field: reject, or truncate with a warning",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def record_size(self) -> int:
        return self.name_width + 12

    @property
    def output_filenames(self) -> tuple[str, str, str]:
        return (self.data_filename, self.index_filename, self.version_filename)

    @model_validator(mode="after")
    def _check_filenames(self) -> "CompactorSettings":
        names = self.output_filenames
        if len(set(names)) != len(names):
            raise ValueError("data, index and version filenames must be distinct")
        for name in names:
            if "/" in name or "\\" in name or name in {".", ".."}:
                raise ValueError(f"output filename must be a bare file name: {name!r}")
        return self


def load_settings(path: Path) -> CompactorSettings:
    """
    Load and validate CompactorSettings from a YAML file.

    An empty file yields the defaults.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML is malformed or any field is missing or invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Error reading config '{path}':\n{e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Error parsing config '{path}': top level must be a mapping")
    try:
        return CompactorSettings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Error parsing config '{path}':\n{e}") from e
