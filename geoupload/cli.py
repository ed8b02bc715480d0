# =============================================================================
# geoupload Command Line
# =============================================================================
# Converts a local GeoJSON, KML, CSV or Excel file to a GeoJSON
# FeatureCollection, reporting skipped rows and dropped pairs on stderr.
# =============================================================================

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from geoupload import __version__
from geoupload.datasets import DatasetList
from geoupload.models import Bounds, get_settings
from geoupload.session import UploadSession

__all__ = ["main", "configure_logging"]


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoupload",
        description="Convert uploaded geospatial and tabular files to GeoJSON",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert a file to a GeoJSON FeatureCollection")
    convert.add_argument("input", type=Path, help="Input .geojson/.json/.kml/.csv/.xlsx/.xls file")
    convert.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout)")
    convert.add_argument(
        "--source-crs",
        default=None,
        help="CRS of tabular coordinates, reprojected to EPSG:4326 (e.g. EPSG:32633)",
    )
    convert.add_argument("--indent", type=int, default=None, help="JSON indent")
    return parser


def _convert(args: argparse.Namespace) -> int:
    try:
        data = args.input.read_bytes()
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    with UploadSession(datasets=DatasetList(), source_crs=args.source_crs) as session:
        outcome = session.load_file(args.input.name, data)
    if not outcome.appended:
        print(f"Error: {outcome.message}", file=sys.stderr)
        return 1

    collection = session.datasets[outcome.index]
    text = json.dumps(collection.to_geojson(), indent=args.indent)
    if args.output is None:
        sys.stdout.write(text + "\n")
    else:
        args.output.write_text(text, encoding="utf-8")

    bounds = Bounds.from_collection(collection)
    print(
        f"{outcome.feature_count} features, {outcome.skipped_rows} rows skipped, "
        f"{outcome.skipped_pairs} pairs dropped"
        + (f", bbox {bounds.as_list()}" if bounds else ""),
        file=sys.stderr,
    )
    for error in outcome.row_errors:
        print(f"  row {error.row_index}: {error.reason}", file=sys.stderr)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the ``geoupload`` command."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "convert":
        return _convert(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
