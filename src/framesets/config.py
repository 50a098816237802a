"""Configuration models for frame set grouping and directory scans."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ExtensionMode(str, Enum):
    DCM = "dcm"
    DCM_UPPER = "DCM"
    ALL_DCM = "all_dcm"
    NO_EXT = "no_ext"
    ALL = "all"


class GroupingConfig(BaseModel):
    image_storage_only: bool = Field(
        default=False,
        description="Skip frames whose SOP Class UID is not an image storage class",
    )
    raise_on_error: bool = Field(
        default=False,
        description="Re-raise the first insertion failure instead of recording it and continuing",
    )


class ScanConfig(BaseModel):
    root: Path
    extension_mode: ExtensionMode = ExtensionMode.ALL
    max_workers: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Threads used to walk the directory tree",
    )
    force: bool = Field(
        default=False,
        description="Read files without a DICOM preamble (pydicom force=True)",
    )
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)


def load_config(path: Path, root: Optional[Path] = None) -> ScanConfig:
    """Load a scan config from a JSON or YAML file, optionally overriding its root."""

    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml  # type: ignore

        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    data = data or {}
    if root is not None:
        data["root"] = root
    return ScanConfig.model_validate(data)
