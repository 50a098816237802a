"""Shared fixtures for frame set tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pydicom
import pytest
from pydicom.dataset import Dataset, FileDataset, FileMetaDataset


MR_IMAGE_STORAGE = "1.2.840.10008.5.1.4.1.1.4"

BASE_ATTRIBUTES: dict[str, Any] = {
    "PatientID": "TEST001",
    "PatientName": "Test^Patient",
    "StudyInstanceUID": "1.2.3.4.5",
    "SeriesInstanceUID": "1.2.3.4.5.6",
    "FrameOfReferenceUID": "1.2.3.4.5.9",
    "SOPClassUID": MR_IMAGE_STORAGE,
    "Modality": "MR",
    "Manufacturer": "Test Manufacturer",
    "ImageType": ["ORIGINAL", "PRIMARY"],
    "Rows": 256,
    "Columns": 256,
    "BitsAllocated": 16,
    "BitsStored": 12,
    "HighBit": 11,
    "PixelRepresentation": 0,
    "PhotometricInterpretation": "MONOCHROME2",
    "SamplesPerPixel": 1,
    "ImageOrientationPatient": [1, 0, 0, 0, 1, 0],
    "PixelSpacing": [0.5, 0.5],
    "SliceThickness": 1.0,
    "SeriesNumber": 10,
    "InstanceNumber": 1,
    "SeriesDescription": "T1 Weighted",
    "EchoTime": 30.0,
}


def build_frame(sop_instance_uid: str | None, **overrides: Any) -> Dataset:
    """Build an MR frame; an override of None removes the attribute."""

    values = dict(BASE_ATTRIBUTES)
    values.update(overrides)
    if sop_instance_uid is not None:
        values["SOPInstanceUID"] = sop_instance_uid

    ds = Dataset()
    for keyword, value in values.items():
        if value is not None:
            setattr(ds, keyword, value)
    return ds


@pytest.fixture
def make_frame() -> Callable[..., Dataset]:
    return build_frame


def write_frame(path: Path, ds: Dataset) -> None:
    file_meta = FileMetaDataset()
    file_meta.MediaStorageSOPClassUID = ds.SOPClassUID
    file_meta.MediaStorageSOPInstanceUID = ds.SOPInstanceUID
    file_meta.TransferSyntaxUID = pydicom.uid.ImplicitVRLittleEndian

    file_ds = FileDataset(str(path), ds, file_meta=file_meta, preamble=b"\0" * 128)
    file_ds.is_little_endian = True
    file_ds.is_implicit_VR = True
    file_ds.save_as(path)


@pytest.fixture
def write_dicom() -> Callable[[Path, Dataset], None]:
    return write_frame
