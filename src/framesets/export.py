"""Tabular views of frame sets as Polars DataFrames."""

from __future__ import annotations

from pathlib import Path

import polars as pl
from pydicom.tag import BaseTag, Tag

from .collection import FrameSetCollection
from .frame_set import FrameSet


SUMMARY_SCHEMA = {
    "frame_set_index": pl.Int64,
    "number_of_frames": pl.Int64,
    "modality": pl.Utf8,
    "sop_class_uid": pl.Utf8,
    "rows": pl.Utf8,
    "columns": pl.Utf8,
    "n_shared": pl.Int64,
    "n_per_frame": pl.Int64,
}

# Distinguishing values surfaced as summary columns.
_SUMMARY_DISTINGUISHING = {
    "modality": Tag("Modality"),
    "sop_class_uid": Tag("SOPClassUID"),
    "rows": Tag("Rows"),
    "columns": Tag("Columns"),
}


def column_name(frame_set: FrameSet, tag: BaseTag) -> str:
    return frame_set.keyword(tag) or str(tag)


def collection_summary(collection: FrameSetCollection) -> pl.DataFrame:
    """One row per frame set, in creation order."""

    rows = []
    for index, frame_set in enumerate(collection):
        distinguishing = frame_set.distinguishing_attributes()
        row = {
            "frame_set_index": index,
            "number_of_frames": frame_set.size(),
            "n_shared": len(frame_set.shared_tags()),
            "n_per_frame": len(frame_set.per_frame_tags()),
        }
        for column, tag in _SUMMARY_DISTINGUISHING.items():
            row[column] = distinguishing[tag]
        rows.append(row)
    return pl.DataFrame(rows, schema=SUMMARY_SCHEMA)


def per_frame_table(frame_set: FrameSet) -> pl.DataFrame:
    """One row per frame in frame order, one column per per-frame tag."""

    tags = frame_set.per_frame_tags()
    schema = {"frame_index": pl.Int64, "sop_instance_uid": pl.Utf8}
    schema.update({column_name(frame_set, tag): pl.Utf8 for tag in tags})

    rows = []
    for index, (instance_uid, attributes) in enumerate(frame_set.frames()):
        row = {"frame_index": index, "sop_instance_uid": instance_uid}
        row.update({column_name(frame_set, tag): attributes.get(tag) for tag in tags})
        rows.append(row)
    return pl.DataFrame(rows, schema=schema)


def write_csv_tables(collection: FrameSetCollection, output_dir: Path) -> list[Path]:
    """Write ``summary.csv`` and one ``frame_set_<i>.csv`` per frame set."""

    output_dir.mkdir(parents=True, exist_ok=True)
    written = [output_dir / "summary.csv"]
    collection_summary(collection).write_csv(written[0])
    for index, frame_set in enumerate(collection):
        path = output_dir / f"frame_set_{index}.csv"
        per_frame_table(frame_set).write_csv(path)
        written.append(path)
    return written
