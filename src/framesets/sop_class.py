"""SOP Class UIDs of image storage objects.

Only image storage classes can be grouped into frame sets meaningfully; the
catalog is limited to what the ``image_storage_only`` filter needs.
"""

from __future__ import annotations


STANDARD_IMAGE_STORAGE_SOP_CLASS_UIDS = frozenset({
    "1.2.840.10008.5.1.4.1.1.1",          # Computed Radiography Image Storage
    "1.2.840.10008.5.1.4.1.1.1.1",        # Digital X-Ray Image Storage - For Presentation
    "1.2.840.10008.5.1.4.1.1.1.1.1",      # Digital X-Ray Image Storage - For Processing
    "1.2.840.10008.5.1.4.1.1.1.2",        # Digital Mammography X-Ray Image Storage - For Presentation
    "1.2.840.10008.5.1.4.1.1.1.2.1",      # Digital Mammography X-Ray Image Storage - For Processing
    "1.2.840.10008.5.1.4.1.1.1.3",        # Digital Intra-Oral X-Ray Image Storage - For Presentation
    "1.2.840.10008.5.1.4.1.1.1.3.1",      # Digital Intra-Oral X-Ray Image Storage - For Processing
    "1.2.840.10008.5.1.4.1.1.2",          # CT Image Storage
    "1.2.840.10008.5.1.4.1.1.2.1",        # Enhanced CT Image Storage
    "1.2.840.10008.5.1.4.1.1.2.2",        # Legacy Converted Enhanced CT Image Storage
    "1.2.840.10008.5.1.4.1.1.3",          # Ultrasound Multi-frame Image Storage (Retired)
    "1.2.840.10008.5.1.4.1.1.3.1",        # Ultrasound Multi-frame Image Storage
    "1.2.840.10008.5.1.4.1.1.4",          # MR Image Storage
    "1.2.840.10008.5.1.4.1.1.4.1",        # Enhanced MR Image Storage
    "1.2.840.10008.5.1.4.1.1.4.3",        # Enhanced MR Color Image Storage
    "1.2.840.10008.5.1.4.1.1.4.4",        # Legacy Converted Enhanced MR Image Storage
    "1.2.840.10008.5.1.4.1.1.5",          # Nuclear Medicine Image Storage (Retired)
    "1.2.840.10008.5.1.4.1.1.6",          # Ultrasound Image Storage (Retired)
    "1.2.840.10008.5.1.4.1.1.6.1",        # Ultrasound Image Storage
    "1.2.840.10008.5.1.4.1.1.6.2",        # Enhanced US Volume Storage
    "1.2.840.10008.5.1.4.1.1.7",          # Secondary Capture Image Storage
    "1.2.840.10008.5.1.4.1.1.7.1",        # Multi-frame Single Bit Secondary Capture Image Storage
    "1.2.840.10008.5.1.4.1.1.7.2",        # Multi-frame Grayscale Byte Secondary Capture Image Storage
    "1.2.840.10008.5.1.4.1.1.7.3",        # Multi-frame Grayscale Word Secondary Capture Image Storage
    "1.2.840.10008.5.1.4.1.1.7.4",        # Multi-frame True Color Secondary Capture Image Storage
    "1.2.840.10008.5.1.4.1.1.12.1",       # X-Ray Angiographic Image Storage
    "1.2.840.10008.5.1.4.1.1.12.1.1",     # Enhanced XA Image Storage
    "1.2.840.10008.5.1.4.1.1.12.2",       # X-Ray Radiofluoroscopic Image Storage
    "1.2.840.10008.5.1.4.1.1.12.2.1",     # Enhanced XRF Image Storage
    "1.2.840.10008.5.1.4.1.1.12.3",       # X-Ray Angiographic Bi-Plane Image Storage (Retired)
    "1.2.840.10008.5.1.4.1.1.13.1.1",     # X-Ray 3D Angiographic Image Storage
    "1.2.840.10008.5.1.4.1.1.13.1.2",     # X-Ray 3D Craniofacial Image Storage
    "1.2.840.10008.5.1.4.1.1.13.1.3",     # Breast Tomosynthesis Image Storage
    "1.2.840.10008.5.1.4.1.1.20",         # Nuclear Medicine Image Storage
    "1.2.840.10008.5.1.4.1.1.66.4",       # Segmentation Storage
    "1.2.840.10008.5.1.4.1.1.77.1",       # VL Image Storage (Retired)
    "1.2.840.10008.5.1.4.1.1.77.2",       # VL Multi-frame Image Storage (Retired)
    "1.2.840.10008.5.1.4.1.1.77.1.1",     # VL Endoscopic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.1.1",   # Video Endoscopic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.2",     # VL Microscopic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.2.1",   # Video Microscopic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.3",     # VL Slide-Coordinates Microscopic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.4",     # VL Photographic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.4.1",   # Video Photographic Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.5.1",   # Ophthalmic Photography 8 Bit Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.5.2",   # Ophthalmic Photography 16 Bit Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.5.4",   # Ophthalmic Tomography Image Storage
    "1.2.840.10008.5.1.4.1.1.77.1.6",     # VL Whole Slide Microscopy Image Storage
    "1.2.840.10008.5.1.4.1.1.81.1",       # Ophthalmic Thickness Map Storage
    "1.2.840.10008.5.1.4.1.1.128",        # PET Image Storage
    "1.2.840.10008.5.1.4.1.1.128.1",      # Legacy Converted Enhanced PET Image Storage
    "1.2.840.10008.5.1.4.1.1.130",        # Enhanced PET Image Storage
    "1.2.840.10008.5.1.4.1.1.481.1",      # RT Image Storage
})

PRIVATE_IMAGE_STORAGE_SOP_CLASS_UIDS = frozenset({
    "1.2.392.200036.9125.1.1.2",          # Fuji CR Image Storage
    "1.3.46.670589.2.3.1.1",              # Philips Specialised XA Storage
    "1.3.46.670589.2.4.1.1",              # Philips CX Image Storage
    "1.3.46.670589.2.8.1.1",              # Philips VRML Storage
    "1.3.46.670589.2.11.1.1",             # Philips Volume Set Storage
    "1.3.46.670589.5.0.9",                # Philips CT Synthetic Image Storage
    "1.3.46.670589.5.0.10",               # Philips MR Synthetic Image Storage
    "1.3.46.670589.5.0.12",               # Philips CX Synthetic Image Storage
    "1.3.46.670589.5.0.14",               # Philips Perfusion Image Storage
    "1.3.46.670589.11.0.0.12.3",          # Philips MR Color Image Storage
    "1.3.46.670589.7.8.1618510091",       # Philips Private X-Ray MF Storage
    "1.3.46.670589.7.8.1618510092",       # Philips Live Run Storage
    "1.3.46.670589.7.8.16185100129",      # Philips Run Storage
    "1.3.46.670589.7.8.16185100130",      # Philips Reconstruction Storage
})

DICOS_IMAGE_STORAGE_SOP_CLASS_UIDS = frozenset({
    "1.2.840.10008.5.1.4.1.1.501.1",      # DICOS CT Image Storage
    "1.2.840.10008.5.1.4.1.1.501.2.1",    # DICOS Digital X-Ray Image Storage - For Presentation
    "1.2.840.10008.5.1.4.1.1.501.2.2",    # DICOS Digital X-Ray Image Storage - For Processing
})


def _normalize(sop_class_uid: str | None) -> str:
    return (sop_class_uid or "").strip().rstrip("\x00")


def is_standard_image_storage(sop_class_uid: str | None) -> bool:
    return _normalize(sop_class_uid) in STANDARD_IMAGE_STORAGE_SOP_CLASS_UIDS


def is_private_image_storage(sop_class_uid: str | None) -> bool:
    return _normalize(sop_class_uid) in PRIVATE_IMAGE_STORAGE_SOP_CLASS_UIDS


def is_dicos_image_storage(sop_class_uid: str | None) -> bool:
    return _normalize(sop_class_uid) in DICOS_IMAGE_STORAGE_SOP_CLASS_UIDS


def is_image_storage(sop_class_uid: str | None) -> bool:
    return (
        is_standard_image_storage(sop_class_uid)
        or is_private_image_storage(sop_class_uid)
        or is_dicos_image_storage(sop_class_uid)
    )
