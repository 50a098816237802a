"""Typer application entrypoint."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from framesets import FrameSetCollection, FrameSetError, ScanConfig, load_config
from framesets.config import ExtensionMode
from framesets.export import collection_summary, write_csv_tables
from framesets.scanner import scan_directory
from logging_config import configure_logging, set_log_level


configure_logging()


app = typer.Typer(help="Group DICOM frames into frame sets")


@app.callback()
def main(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v for progress, -vv for debug output"),
) -> None:
    if verbose:
        set_log_level("DEBUG" if verbose > 1 else "INFO")


def _build_config(
    root: Path,
    config_path: Optional[Path],
    extension_mode: Optional[ExtensionMode],
    image_storage_only: Optional[bool],
    force: Optional[bool],
) -> ScanConfig:
    config = load_config(config_path, root) if config_path else ScanConfig(root=root)
    updates: dict = {"root": root}
    if extension_mode is not None:
        updates["extension_mode"] = extension_mode
    if force is not None:
        updates["force"] = force
    if image_storage_only is not None:
        updates["grouping"] = config.grouping.model_copy(update={"image_storage_only": image_storage_only})
    return config.model_copy(update=updates)


def _scan(config: ScanConfig) -> FrameSetCollection:
    try:
        return scan_directory(config)
    except (FrameSetError, NotADirectoryError) as exc:
        typer.echo(f"Scan failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _report_failures(collection: FrameSetCollection) -> None:
    for failure in collection.failures:
        where = escape(str(failure.label or failure.index))
        rprint(f"[yellow]Not grouped:[/yellow] {where}: {escape(str(failure.error))}")


RootArgument = typer.Argument(..., help="Directory to scan for DICOM files")
ConfigOption = typer.Option(None, "--config", help="JSON or YAML scan config")
ExtensionOption = typer.Option(None, "--extension-mode", help="Which file names count as DICOM")
ImageOnlyOption = typer.Option(
    None, "--image-storage-only/--all-sop-classes", help="Skip non-image SOP classes"
)
ForceOption = typer.Option(None, "--force/--no-force", help="Read files without a DICOM preamble")


@app.command()
def scan(
    root: Path = RootArgument,
    config_path: Optional[Path] = ConfigOption,
    extension_mode: Optional[ExtensionMode] = ExtensionOption,
    image_storage_only: Optional[bool] = ImageOnlyOption,
    force: Optional[bool] = ForceOption,
) -> None:
    """Summarize the frame sets found under ROOT."""

    collection = _scan(_build_config(root, config_path, extension_mode, image_storage_only, force))
    summary = collection_summary(collection)

    table = Table(title=f"Frame sets ({collection.number_of_frames} frames)")
    table.add_column("Set", justify="right")
    table.add_column("Frames", justify="right")
    table.add_column("Modality")
    table.add_column("SOP Class UID")
    table.add_column("Matrix")
    table.add_column("Shared", justify="right")
    table.add_column("Per-frame", justify="right")
    for row in summary.iter_rows(named=True):
        table.add_row(
            str(row["frame_set_index"]),
            str(row["number_of_frames"]),
            row["modality"],
            row["sop_class_uid"],
            f"{row['rows']}x{row['columns']}",
            str(row["n_shared"]),
            str(row["n_per_frame"]),
        )
    rprint(table)
    _report_failures(collection)


@app.command()
def dump(
    root: Path = RootArgument,
    config_path: Optional[Path] = ConfigOption,
    extension_mode: Optional[ExtensionMode] = ExtensionOption,
    image_storage_only: Optional[bool] = ImageOnlyOption,
    force: Optional[bool] = ForceOption,
) -> None:
    """Print every frame set with its distinguishing, shared and per-frame attributes."""

    collection = _scan(_build_config(root, config_path, extension_mode, image_storage_only, force))
    typer.echo(str(collection), nl=False)
    _report_failures(collection)


@app.command()
def export(
    root: Path = RootArgument,
    output_dir: Path = typer.Argument(..., help="Directory for the CSV tables"),
    config_path: Optional[Path] = ConfigOption,
    extension_mode: Optional[ExtensionMode] = ExtensionOption,
    image_storage_only: Optional[bool] = ImageOnlyOption,
    force: Optional[bool] = ForceOption,
) -> None:
    """Write a summary table and one per-frame table per frame set as CSV."""

    collection = _scan(_build_config(root, config_path, extension_mode, image_storage_only, force))
    written = write_csv_tables(collection, output_dir)
    typer.echo(f"Wrote {len(written)} tables to {output_dir}")
    _report_failures(collection)


if __name__ == "__main__":
    app()
