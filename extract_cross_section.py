"""Build a cross-section from a JSON request document and export the profiles.

The request holds the section line plus raw block, elevation and pit records
(see ``cross_section.models.CrossSectionRequest``). The result is written as
JSON, and optionally the intersected blocks as CSV.
"""

import csv
from pathlib import Path

import click

from cross_section import CrossSectionRequest, build_cross_section
from cross_section.config import Settings
from cross_section.logging_utils import configure_logging
from cross_section.models import CrossSectionResult

BLOCK_FIELDS = ["distance", "width", "height", "elevation", "rock", "color"]


def export_blocks_csv(result: CrossSectionResult, path: Path) -> None:
    """Write intersected blocks to a CSV file."""
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=BLOCK_FIELDS)
        writer.writeheader()
        writer.writerows(b.model_dump() for b in result.blocks)
    print(f"CSV exported: {path}")


def print_summary(request: CrossSectionRequest, result: CrossSectionResult) -> None:
    line = request.line
    valid = [p for p in result.elevation_profile if p.elevation is not None]
    print(f"Line:          ({line.start_lat}, {line.start_lng}) -> ({line.end_lat}, {line.end_lng})")
    print(f"Projection:    {line.source_projection}")
    print(f"Blocks:        {len(result.blocks):,} of {len(request.blocks):,} records")
    print(f"Elevation:     {len(valid):,} / {len(result.elevation_profile):,} samples with data")
    print(f"Pit points:    {len(result.pit_profile):,}")
    print(f"Range:         {result.elevation_range.min:.1f} m  to  {result.elevation_range.max:.1f} m")
    print()


@click.command()
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Result JSON path")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Block CSV path")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
def main(request_path: Path, output: Path | None, csv_path: Path | None, log_level: str | None):
    """Build the cross-section described by REQUEST_PATH."""
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level)

    print(f"Reading request: {request_path}\n")
    request = CrossSectionRequest.model_validate_json(request_path.read_text())
    result = build_cross_section(request, settings)

    print_summary(request, result)

    output = output or request_path.with_name(request_path.stem + "_section.json")
    output.write_text(result.model_dump_json(indent=2))
    print(f"JSON exported: {output}")

    if csv_path is not None:
        export_blocks_csv(result, csv_path)


if __name__ == "__main__":
    main()
