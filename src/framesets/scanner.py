"""Reading DICOM files from disk into frames."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, Tuple

import pydicom
from pydicom.dataset import Dataset
from pydicom.errors import InvalidDicomError

from .collection import FrameSetCollection
from .config import ExtensionMode, ScanConfig


logger = logging.getLogger(__name__)


def matches_extension(name: str, mode: ExtensionMode | str) -> bool:
    mode = ExtensionMode(mode)
    if mode is ExtensionMode.DCM:
        return name.endswith(".dcm")
    if mode is ExtensionMode.DCM_UPPER:
        return name.endswith(".DCM")
    if mode is ExtensionMode.ALL_DCM:
        return name.lower().endswith(".dcm")
    if mode is ExtensionMode.NO_EXT:
        return not Path(name).suffix
    return name.lower().endswith(".dcm") or not Path(name).suffix


def iter_dicom_files(
    root: Path,
    extension_mode: ExtensionMode | str = ExtensionMode.ALL,
    max_workers: int = 8,
) -> Iterator[Path]:
    """Yield DICOM-ish files under *root* using a threaded scandir walker."""

    def walk(directory: Path) -> tuple[list[Path], list[Path]]:
        files: list[Path] = []
        dirs: list[Path] = []
        with os.scandir(directory) as it:
            for entry in it:
                try:
                    if entry.is_file() and matches_extension(entry.name, extension_mode):
                        files.append(Path(entry.path))
                    elif entry.is_dir():
                        dirs.append(Path(entry.path))
                except FileNotFoundError:
                    # Race: file/dir vanished after scandir listed it.
                    continue
        return files, dirs

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(walk, root)]
        while futures:
            future = futures.pop()
            files, dirs = future.result()
            yield from files
            for dir_path in dirs:
                futures.append(executor.submit(walk, dir_path))


def read_frames(
    paths: Iterable[Path],
    *,
    force: bool = False,
    stop_before_pixels: bool = True,
) -> Iterator[Tuple[Path, Dataset]]:
    """Yield ``(path, dataset)`` for every readable file; unreadable ones are logged and skipped."""

    for path in paths:
        try:
            dataset = pydicom.dcmread(path, force=force, stop_before_pixels=stop_before_pixels)
        except (InvalidDicomError, OSError) as exc:
            logger.warning("Skipping unreadable file %s: %s", path, exc)
            continue
        yield path, dataset


def scan_directory(config: ScanConfig) -> FrameSetCollection:
    """Group every DICOM file under ``config.root`` into frame sets.

    Paths are sorted first so frame set creation order does not depend on the
    walker's scheduling.
    """

    root = config.root.resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Scan root is not a directory: {root}")

    paths = sorted(iter_dicom_files(root, config.extension_mode, config.max_workers))
    logger.info("Found %d candidate files under %s", len(paths), root)

    collection = FrameSetCollection(config.grouping)
    collection.insert_labeled((str(path), dataset) for path, dataset in read_frames(paths, force=config.force))
    logger.info(
        "Grouped %d frames into %d frame sets (%d failed, %d skipped)",
        collection.number_of_frames,
        len(collection),
        len(collection.failures),
        collection.skipped,
    )
    return collection
