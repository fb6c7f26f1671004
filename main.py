"""
Main entry point for the region resolver application.

This script provides the command-line interface for serving the resolver,
resolving single coordinates, resolving CSV batches and validating the
reference data.
"""

import argparse
import json
import sys
import time
from pathlib import Path

import pandas as pd

from region_resolver.batch import BatchResolver
from region_resolver.config import ResolverConfig, LOG_LEVELS
from region_resolver.data_loader import ReferenceDataLoader
from region_resolver.exceptions import (
    ConfigurationError, DataLoadError, DataQualityError, FileAccessError, ValidationError
)
from region_resolver.logging_config import setup_logging
from region_resolver.matching.name_matcher import HintMatcher
from region_resolver.models import AddressHints
from region_resolver.output.output_generator import OutputGenerator
from region_resolver.resolver import RegionResolver


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Region Resolver - map coordinates and address hints to divisions, "
                    "districts and upazilas"
    )

    parser.add_argument("--divisions", help="Path to divisions CSV file (default: bundled seed data)")
    parser.add_argument("--districts", help="Path to districts CSV file (default: bundled seed data)")
    parser.add_argument("--upazilas", help="Path to upazilas CSV file (default: bundled seed data)")

    parser.add_argument(
        "--hint-fuzzy-threshold",
        type=int,
        help="Enable fuzzy hint matching at this score (0-100); substring matching only when omitted"
    )

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument("--log-file", help="Write logs to this file as well as stdout")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP and Socket.IO server")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    serve.add_argument(
        "--channel-prefix", default="user:", help="Realtime channel prefix (default: user:)"
    )

    resolve = subparsers.add_parser("resolve", help="Resolve a single coordinate")
    resolve.add_argument("--lat", required=True, help="Latitude")
    resolve.add_argument("--lon", required=True, help="Longitude")
    resolve.add_argument("--state", help="Division name hint")
    resolve.add_argument("--district", help="District name hint")
    resolve.add_argument("--upazila", help="Upazila name hint")

    batch = subparsers.add_parser("batch", help="Resolve every row of a CSV file")
    batch.add_argument(
        "--input", required=True,
        help="CSV with latitude, longitude and optional state, district, upazila columns"
    )
    batch.add_argument("--output", required=True, help="Output directory for results")
    batch.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    subparsers.add_parser("validate", help="Load and summarise the reference data")

    return parser.parse_args(argv)


def build_config(args) -> ResolverConfig:
    """Create the configuration from parsed arguments."""
    values = {
        'hint_fuzzy_threshold': args.hint_fuzzy_threshold,
        'log_level': args.log_level,
        'log_file': args.log_file,
    }
    for arg_name, field_name in (('divisions', 'divisions_file'),
                                 ('districts', 'districts_file'),
                                 ('upazilas', 'upazilas_file')):
        if getattr(args, arg_name):
            values[field_name] = getattr(args, arg_name)

    if args.command == "serve":
        values.update(host=args.host, port=args.port, channel_prefix=args.channel_prefix)
    elif args.command == "batch":
        values['output_directory'] = args.output

    return ResolverConfig(**values)


def build_resolver(config: ResolverConfig, logger) -> RegionResolver:
    hierarchy = ReferenceDataLoader(logger.logger).load_from_config(config)
    logger.log_hierarchy_summary(hierarchy.summary())
    return RegionResolver(
        hierarchy,
        hint_matcher=HintMatcher(config.hint_fuzzy_threshold, logger=logger.logger),
        logger=logger.logger
    )


def run_serve(config: ResolverConfig, logger) -> int:
    from region_resolver.web.app import create_app, get_component

    resolver = build_resolver(config, logger)
    app = create_app(config, resolver=resolver, logger=logger.logger)
    socketio = get_component(app, 'socketio')

    logger.info(f"Serving on http://{config.host}:{config.port}")
    socketio.run(app, host=config.host, port=config.port, use_reloader=False,
                 allow_unsafe_werkzeug=True)
    return 0


def run_resolve(args, config: ResolverConfig, logger) -> int:
    resolver = build_resolver(config, logger)
    hints = AddressHints(state=args.state, district=args.district, upazila=args.upazila)
    result = resolver.resolve(args.lat, args.lon, hints)

    hierarchy = resolver.hierarchy
    output = result.to_dict()
    output['names'] = {
        'division': hierarchy.get_division(result.division_id).name
        if result.division_id is not None else None,
        'district': hierarchy.get_district(result.district_id).name
        if result.district_id is not None else None,
        'upazila': hierarchy.get_upazila(result.upazila_id).name
        if result.upazila_id is not None else None,
    }
    output['methods'] = result.methods
    print(json.dumps(output, indent=2))
    return 0


def run_batch(args, config: ResolverConfig, logger) -> int:
    resolver = build_resolver(config, logger)

    input_path = Path(args.input)
    if not input_path.is_file():
        raise FileNotFoundError(f"Batch input file not found: {args.input}")

    logger.log_phase_start("batch resolution")
    start = time.time()

    df = pd.read_csv(input_path)
    logger.log_file_operation("Loaded batch input", str(input_path), len(df))

    batch_resolver = BatchResolver(resolver, logger.logger, show_progress=not args.no_progress)
    results, stats = batch_resolver.resolve_dataframe(df)

    generator = OutputGenerator(config.output_directory, logger.logger)
    generated_files = generator.generate_all_outputs(results, stats, input_file=str(input_path))

    logger.log_phase_complete("batch resolution", stats.total_rows, time.time() - start)
    logger.log_resolution_statistics(resolver.get_statistics())

    print(f"\nResolved {stats.total_rows:,} rows "
          f"({stats.get_resolution_rate():.2f}% fully resolved, {stats.invalid:,} invalid)")
    print("Generated Output Files:")
    for file_type, file_path in generated_files.items():
        print(f"  {file_type}: {Path(file_path).name}")
    return 0


def run_validate(config: ResolverConfig, logger) -> int:
    hierarchy = ReferenceDataLoader(logger.logger).load_from_config(config)
    summary = hierarchy.summary()
    logger.log_hierarchy_summary(summary)

    print("Reference data is valid:")
    for level, count in summary.items():
        print(f"  {level}: {count:,}")

    if summary['geolocated_upazilas'] == 0:
        print("Warning: no upazila carries coordinates; nearest-upazila fallback is unavailable")
    return 0


def main(argv=None):
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = build_config(args)
        logger = setup_logging(config)
        logger.debug(f"Configuration: {config.to_dict()}")

        if args.command == "serve":
            code = run_serve(config, logger)
        elif args.command == "resolve":
            code = run_resolve(args, config, logger)
        elif args.command == "batch":
            code = run_batch(args, config, logger)
        else:
            code = run_validate(config, logger)
        sys.exit(code)

    except DataQualityError as e:
        print(f"\nData Quality Error: {e}", file=sys.stderr)
        if e.recommendations:
            print("Recommendations:", file=sys.stderr)
            for rec in e.recommendations:
                print(f"  - {rec}", file=sys.stderr)
        sys.exit(2)

    except (ValidationError, ConfigurationError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(3)

    except (FileNotFoundError, FileAccessError) as e:
        print(f"\nFile Error: {e}", file=sys.stderr)
        print("Please check that all input files exist and are accessible.", file=sys.stderr)
        sys.exit(4)

    except DataLoadError as e:
        print(f"\nData Load Error: {e}", file=sys.stderr)
        sys.exit(2)

    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        sys.exit(130)

    except Exception as e:
        print(f"\nError: Unexpected error: {e}", file=sys.stderr)
        print("Please check the log files for more details.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
