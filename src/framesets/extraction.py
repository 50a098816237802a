"""Attribute classification for a single frame.

Splits the attributes of a frame into the distinguishing signature that decides
frame set membership and the candidate map that feeds the shared/per-frame
partition.
"""

from __future__ import annotations

from typing import MutableMapping

from pydicom.tag import BaseTag

from .source import AttributeSource
from .tags import (
    ACQUISITION_DATE,
    ACQUISITION_DATE_TIME,
    ACQUISITION_TIME,
    DISTINGUISHING_TAGS,
    is_per_frame_candidate,
)


AttributeMap = dict[BaseTag, str]
KeywordCache = MutableMapping[BaseTag, str]


def _remember_keyword(keywords: KeywordCache | None, source: AttributeSource, tag: BaseTag) -> None:
    if keywords is not None and tag not in keywords:
        keywords[tag] = source.keyword(tag)


def extract_distinguishing(source: AttributeSource, keywords: KeywordCache | None = None) -> AttributeMap:
    """Return the distinguishing signature of a frame.

    The key set is always the full distinguishing tag set; absent tags map to
    ``""`` so that absent and empty values compare equal.
    """

    signature: AttributeMap = {}
    for tag in sorted(DISTINGUISHING_TAGS):
        signature[tag] = source.delimited_value(tag)
        _remember_keyword(keywords, source, tag)
    return signature


def synthesize_acquisition_datetime(source: AttributeSource) -> str:
    """AcquisitionDateTime if present, else AcquisitionDate + AcquisitionTime.

    No separator is inserted and the time is not validated for zero padding.
    """

    value = source.single_value(ACQUISITION_DATE_TIME)
    if value:
        return value
    return source.single_value(ACQUISITION_DATE) + source.single_value(ACQUISITION_TIME)


def extract_per_frame(source: AttributeSource, keywords: KeywordCache | None = None) -> AttributeMap:
    """Return the candidate per-frame attributes of a frame, in tag order.

    Private, repeating group, file meta, group length, distinguishing and
    acquisition date/time tags are skipped, as are sequences.  The synthesized
    AcquisitionDateTime is always present.
    """

    candidates: AttributeMap = {}
    for tag in source.tags():
        if not is_per_frame_candidate(tag) or source.is_sequence(tag):
            continue
        candidates[tag] = source.delimited_value(tag)
        _remember_keyword(keywords, source, tag)

    candidates[ACQUISITION_DATE_TIME] = synthesize_acquisition_datetime(source)
    _remember_keyword(keywords, source, ACQUISITION_DATE_TIME)
    return dict(sorted(candidates.items()))
