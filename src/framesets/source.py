"""Attribute sources: the read-only view of one frame that the classifier consumes.

A source answers three questions about a frame: which tags are present, what
the canonical string value of a tag is, and whether a tag holds a nested
sequence.  Parsing the underlying encoding is left to pydicom.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Union

from pydicom.datadict import dictionary_has_tag, dictionary_VR, keyword_for_tag
from pydicom.dataset import Dataset
from pydicom.multival import MultiValue
from pydicom.sequence import Sequence
from pydicom.tag import BaseTag, Tag


# Bulk binary value representations are never rendered as text.
BINARY_VRS = frozenset({"OB", "OD", "OF", "OL", "OV", "OW", "UN"})

VALUE_DELIMITER = "\\"


def _is_multi_valued(value: Any) -> bool:
    return isinstance(value, (list, tuple, MultiValue))


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("latin-1").strip("\x00 ")
    return str(value)


def delimited_string(value: Any) -> str:
    """Render *value* as a backslash-delimited string, ``""`` when absent."""

    if _is_multi_valued(value):
        return VALUE_DELIMITER.join(_to_text(item) for item in value)
    return _to_text(value)


def single_string(value: Any) -> str:
    """Render the first value of *value*, ``""`` when absent."""

    if _is_multi_valued(value):
        return _to_text(value[0]) if len(value) else ""
    return _to_text(value)


class AttributeSource(ABC):
    """Queryable tag -> value view of a single frame."""

    @abstractmethod
    def tags(self) -> list[BaseTag]:
        """Tags present in the frame, in ascending tag order."""

    @abstractmethod
    def delimited_value(self, tag: BaseTag) -> str:
        """All values of *tag* joined by a backslash, ``""`` when absent."""

    @abstractmethod
    def single_value(self, tag: BaseTag) -> str:
        """First value of *tag*, ``""`` when absent."""

    @abstractmethod
    def is_sequence(self, tag: BaseTag) -> bool:
        """True when *tag* holds nested sequence items."""

    def keyword(self, tag: BaseTag) -> str:
        return keyword_for_tag(tag)


class DatasetAttributeSource(AttributeSource):
    """Attribute source backed by a ``pydicom.Dataset``."""

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset

    def tags(self) -> list[BaseTag]:
        return sorted(Tag(tag) for tag in self.dataset.keys())

    def _value(self, tag: BaseTag) -> Any:
        element = self.dataset.get(tag)
        if element is None or element.VR in BINARY_VRS:
            return None
        return element.value

    def delimited_value(self, tag: BaseTag) -> str:
        return delimited_string(self._value(tag))

    def single_value(self, tag: BaseTag) -> str:
        return single_string(self._value(tag))

    def is_sequence(self, tag: BaseTag) -> bool:
        element = self.dataset.get(tag)
        return element is not None and element.VR == "SQ"

    def keyword(self, tag: BaseTag) -> str:
        keyword = keyword_for_tag(tag)
        if keyword:
            return keyword
        element = self.dataset.get(tag)
        return element.name if element is not None else ""


class MappingAttributeSource(AttributeSource):
    """Attribute source backed by a plain mapping.

    Keys may be DICOM keywords, ``(group, element)`` tuples or integer tags.
    A tag whose dictionary VR is SQ, a ``pydicom.sequence.Sequence`` value, or a
    list of mappings or datasets is treated as a sequence.
    """

    def __init__(self, values: Mapping[Any, Any]) -> None:
        self._values: dict[BaseTag, Any] = {Tag(key): value for key, value in values.items()}

    def tags(self) -> list[BaseTag]:
        return sorted(self._values)

    def delimited_value(self, tag: BaseTag) -> str:
        return delimited_string(self._values.get(tag))

    def single_value(self, tag: BaseTag) -> str:
        return single_string(self._values.get(tag))

    def is_sequence(self, tag: BaseTag) -> bool:
        if tag not in self._values:
            return False
        # An SQ tag is a sequence however many items it holds, including none.
        if dictionary_has_tag(tag) and dictionary_VR(tag) == "SQ":
            return True
        value = self._values[tag]
        if isinstance(value, Sequence):
            return True
        return _is_multi_valued(value) and any(isinstance(item, (Mapping, Dataset)) for item in value)


Frame = Union[AttributeSource, Dataset, Mapping[Any, Any]]


def as_attribute_source(frame: Frame) -> AttributeSource:
    if isinstance(frame, AttributeSource):
        return frame
    if isinstance(frame, Dataset):
        return DatasetAttributeSource(frame)
    if isinstance(frame, Mapping):
        return MappingAttributeSource(frame)
    raise TypeError(f"Cannot read attributes from {type(frame).__name__}")
