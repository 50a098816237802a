"""Grouping of DICOM frames into frame sets with shared and per-frame attributes."""

from .collection import FrameSetCollection, build_frame_sets  # noqa: F401
from .config import ExtensionMode, GroupingConfig, ScanConfig, load_config  # noqa: F401
from .errors import (  # noqa: F401
    DuplicateInstanceIdentifierError,
    FrameSetError,
    InsertFailure,
    MissingInstanceIdentifierError,
)
from .frame_set import FrameSet, Partition  # noqa: F401
from .source import AttributeSource, DatasetAttributeSource, MappingAttributeSource, as_attribute_source  # noqa: F401
