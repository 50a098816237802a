"""Frame ordering within a frame set.

Frames sort by (SeriesNumber, InstanceNumber, SOPInstanceUID).  Numbers that
are absent or unparseable sort as -1; the UID tiebreak is a plain string
comparison so the order is reproducible across runs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping

from pydicom.tag import BaseTag

from .tags import INSTANCE_NUMBER, SERIES_NUMBER


logger = logging.getLogger(__name__)

MISSING_NUMBER = -1

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_integer(value: str | None, *, label: str = "value", instance_uid: str = "") -> int:
    """Parse a signed integer, returning -1 when absent or malformed."""

    if value is None:
        return MISSING_NUMBER
    text = value.strip()
    if not text:
        return MISSING_NUMBER
    if not _INTEGER_PATTERN.fullmatch(text):
        logger.warning("Malformed %s %r for instance %s; sorting as %d", label, value, instance_uid, MISSING_NUMBER)
        return MISSING_NUMBER
    return int(text)


@dataclass(frozen=True, order=True)
class FrameSortKey:
    series_number: int
    instance_number: int
    instance_uid: str

    @classmethod
    def from_attributes(cls, instance_uid: str, attributes: Mapping[BaseTag, str]) -> "FrameSortKey":
        return cls(
            series_number=parse_integer(
                attributes.get(SERIES_NUMBER), label="SeriesNumber", instance_uid=instance_uid
            ),
            instance_number=parse_integer(
                attributes.get(INSTANCE_NUMBER), label="InstanceNumber", instance_uid=instance_uid
            ),
            instance_uid=instance_uid,
        )


def sort_instances(per_frame_by_instance: Mapping[str, Mapping[BaseTag, str]]) -> list[str]:
    """Return instance UIDs ordered by their frame sort keys."""

    keys = [
        FrameSortKey.from_attributes(instance_uid, attributes)
        for instance_uid, attributes in per_frame_by_instance.items()
    ]
    return [key.instance_uid for key in sorted(keys)]
