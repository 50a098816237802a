"""Tag vocabulary used to classify the attributes of a frame.

Tags are ``pydicom.tag.BaseTag`` values, so equality and ordering follow the
numeric (group, element) order that DICOM dumps use.
"""

from __future__ import annotations

from pydicom.datadict import repeater_has_tag
from pydicom.tag import BaseTag, Tag


SOP_INSTANCE_UID = Tag("SOPInstanceUID")
SOP_CLASS_UID = Tag("SOPClassUID")
SERIES_NUMBER = Tag("SeriesNumber")
INSTANCE_NUMBER = Tag("InstanceNumber")

ACQUISITION_DATE_TIME = Tag("AcquisitionDateTime")
ACQUISITION_DATE = Tag("AcquisitionDate")
ACQUISITION_TIME = Tag("AcquisitionTime")


# Values of these tags must agree for two frames to share a frame set.
DISTINGUISHING_TAGS: frozenset[BaseTag] = frozenset(
    Tag(keyword)
    for keyword in (
        # Patient and study
        "PatientID",
        "PatientName",
        "StudyInstanceUID",
        "FrameOfReferenceUID",
        # Equipment
        "Manufacturer",
        "InstitutionName",
        "InstitutionAddress",
        "StationName",
        "InstitutionalDepartmentName",
        "ManufacturerModelName",
        "DeviceSerialNumber",
        "SoftwareVersions",
        "GantryID",
        "PixelPaddingValue",
        "Modality",
        # Image classification
        "ImageType",
        "BurnedInAnnotation",
        "SOPClassUID",
        # Pixel grid
        "Rows",
        "Columns",
        "BitsStored",
        "BitsAllocated",
        "HighBit",
        "PixelRepresentation",
        "PhotometricInterpretation",
        "PlanarConfiguration",
        "SamplesPerPixel",
        # Geometry
        "ImageOrientationPatient",
        "PixelSpacing",
        "SliceThickness",
    )
)

ACQUISITION_DATE_TIME_TAGS: frozenset[BaseTag] = frozenset(
    {ACQUISITION_DATE_TIME, ACQUISITION_DATE, ACQUISITION_TIME}
)

# Never copied verbatim into a per-frame map; the acquisition date/time
# components are folded into a single synthesized AcquisitionDateTime.
EXCLUDED_FROM_PER_FRAME_TAGS: frozenset[BaseTag] = DISTINGUISHING_TAGS | ACQUISITION_DATE_TIME_TAGS


def is_private(tag: BaseTag) -> bool:
    return tag.is_private


def is_repeating_group(tag: BaseTag) -> bool:
    """True for tags that live in a repeating group such as overlays (60xx) or curves (50xx)."""

    if tag.group % 2 == 0 and (tag.group & 0xFF00) in (0x5000, 0x6000):
        return True
    return repeater_has_tag(int(tag))


def is_file_meta_information(tag: BaseTag) -> bool:
    return tag.group == 0x0002


def is_group_length(tag: BaseTag) -> bool:
    return tag.element == 0x0000


def is_per_frame_candidate(tag: BaseTag) -> bool:
    """Return True if *tag* may be tracked as a shared or per-frame attribute.

    Sequence-valued elements are rejected separately since that check needs
    the value, not just the tag.
    """

    return not (
        is_private(tag)
        or is_repeating_group(tag)
        or is_file_meta_information(tag)
        or is_group_length(tag)
        or tag in EXCLUDED_FROM_PER_FRAME_TAGS
    )
