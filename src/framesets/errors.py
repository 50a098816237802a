"""Frame set exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class FrameSetError(RuntimeError):
    """Base class for errors raised while grouping frames."""


class MissingInstanceIdentifierError(FrameSetError):
    """Raised when a frame has no SOP Instance UID to index it by."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Missing SOP Instance UID")


class DuplicateInstanceIdentifierError(FrameSetError):
    """Raised when a SOP Instance UID has already been inserted."""

    def __init__(self, instance_uid: str) -> None:
        self.instance_uid = instance_uid
        super().__init__(f"SOP Instance UID {instance_uid} already inserted")


@dataclass(frozen=True)
class InsertFailure:
    """A frame that could not be grouped, with its position in the input stream.

    ``label`` identifies the frame for the caller, typically its file path.
    """

    index: int
    error: FrameSetError
    label: Optional[str] = None
