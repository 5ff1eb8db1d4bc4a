#!/usr/bin/env python3
"""
Railway Line Consolidation - Main Execution Script

This script orchestrates the complete merge pipeline:
1. Load the pruned OSM railway snapshot (<code>.geojson) and check ids
2. Load the line catalog
3. Merge the ways of every catalog line into one polyline
4. Write <code>-filtered.geojson and <code>-merged-only.geojson
5. Optionally write a per-line CSV report and an HTML preview map
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.logging_config import get_logger, setup_debug, setup_logging, setup_quiet, setup_verbose
from config.settings import settings
from src.analysis import MergeStatistics
from src.catalog import CatalogError, LineDefinition, load_catalog
from src.loading import DuplicateFeatureIdError, SnapshotLoader
from src.merging import MergePipeline, MergeResult, TrackAssembler
from src.output import OutputWriter, select_merged_only
from src.visualization import MapCreator


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Merge OSM railway ways into one polyline per national rail line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("country_code", help="Country code; reads <code>.geojson")
    parser.add_argument("--catalog", type=Path, default=None, help="Line catalog JSON (default: data/catalogs/<code>.json)")
    parser.add_argument("--input-dir", type=Path, default=None, help="Directory holding <code>.geojson (default: current directory)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Output directory for results (default: current directory)")
    parser.add_argument("--track-prefix", default=None, help=f"Prefix of generated track ids (default: {settings.railway.track_prefix})")
    parser.add_argument("--report", action="store_true", help="Also write <code>-report.csv with per-line statistics")
    parser.add_argument("--preview-map", action="store_true", help="Also write <code>-preview.html with a Folium preview")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging (very detailed)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")

    return parser.parse_args(argv)


def load_inputs(
    code: str,
    input_dir: Optional[Path],
    catalog_path: Optional[Path],
    logger: Optional[logging.Logger] = None,
) -> tuple:
    """Load the snapshot and the catalog."""
    if logger is None:
        logger = get_logger(__name__)

    logger.info("=" * 60)
    logger.info("PHASE 1: INPUT")
    logger.info("=" * 60)

    loader = SnapshotLoader()
    features = loader.load(settings.input_path(code, input_dir))
    logger.info(loader.get_summary())

    catalog = load_catalog(catalog_path or settings.catalog_path(code))

    return features, catalog


def run_merge(
    features: List[Dict[str, Any]],
    catalog: List[LineDefinition],
    track_prefix: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> MergeResult:
    """Run the merge pipeline over the catalog."""
    if logger is None:
        logger = get_logger(__name__)

    logger.info("=" * 60)
    logger.info("PHASE 2: MERGING")
    logger.info("=" * 60)

    pipeline = MergePipeline(assembler=TrackAssembler(track_prefix=track_prefix))
    return pipeline.run(features, catalog)


def write_outputs(
    code: str,
    result: MergeResult,
    output_dir: Optional[Path],
    report: bool = False,
    preview_map: bool = False,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Path]:
    """Write the GeoJSON outputs and the optional report and preview."""
    if logger is None:
        logger = get_logger(__name__)

    logger.info("=" * 60)
    logger.info("PHASE 3: OUTPUT")
    logger.info("=" * 60)

    writer = OutputWriter(output_dir=output_dir)
    filtered_path, merged_only_path = writer.write_all(code, result.features)
    paths = {"filtered": filtered_path, "merged_only": merged_only_path}

    if report:
        stats = MergeStatistics(result)
        report_path = settings.output_path("report", code, output_dir)
        stats.save_csv(report_path)
        paths["report"] = report_path

        for _, row in stats.get_problem_lines().iterrows():
            logger.info(f"  {row['track_id']}: {row['status']} ({row['name']})")

    if preview_map:
        preview_path = settings.output_path("preview", code, output_dir)
        MapCreator().create_preview_map(select_merged_only(result.features), output_path=preview_path)
        paths["preview"] = preview_path

    return paths


def print_summary(result: MergeResult, paths: Dict[str, Path], logger: Optional[logging.Logger] = None) -> None:
    """Print final summary."""
    if logger is None:
        logger = get_logger(__name__)

    logger.info("=" * 60)
    logger.info("MERGE COMPLETE")
    logger.info("=" * 60)

    logger.info(f"Merged lines: {len(result.merged)}")
    logger.info(f"Lines with empty geometry: {len(result.empty_lines)}")
    logger.info(f"Ways left unmerged: {result.unconsumed_ways}")
    logger.info(f"Features written: {len(result.features)}")

    logger.info("\nOutputs:")
    for kind, path in paths.items():
        logger.info(f"  {kind}: {path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    if args.debug:
        setup_debug()
    elif args.quiet:
        setup_quiet()
    elif args.verbose:
        setup_verbose()
    else:
        setup_logging()

    logger = get_logger("railway_merge")

    logger.info("=" * 60)
    logger.info("RAILWAY LINE CONSOLIDATION")
    logger.info(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info("=" * 60)

    code = args.country_code

    try:
        # Phase 1: Input
        features, catalog = load_inputs(code, args.input_dir, args.catalog, logger=logger)

        # Phase 2: Merge
        result = run_merge(features, catalog, track_prefix=args.track_prefix, logger=logger)

        # Phase 3: Output
        paths = write_outputs(
            code,
            result,
            args.output_dir,
            report=args.report,
            preview_map=args.preview_map,
            logger=logger,
        )

        print_summary(result, paths, logger)

        logger.info("\n✅ Merge completed successfully!")
        return 0

    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    except DuplicateFeatureIdError as e:
        logger.error(str(e))
        return 1

    except CatalogError as e:
        logger.error(f"Invalid line catalog: {e}")
        return 1

    except Exception as e:
        logger.error("=" * 60)
        logger.error("ERROR")
        logger.error("=" * 60)
        logger.error(f"Exception: {type(e).__name__}")
        logger.error(f"Message: {str(e)}")
        logger.error("Traceback:")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
