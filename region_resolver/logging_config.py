"""
Logging configuration for the region resolver application.

This module provides logging infrastructure with configurable levels, file
output, and helpers for the messages the loader, resolver and CLI emit.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict
from datetime import datetime


class ResolverLogger:
    """Custom logger for region resolver operations."""

    def __init__(self, name: str = "region_resolver", level: str = "INFO",
                 log_file: Optional[str] = None):
        """
        Initialize the resolver logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Set up file logging handler."""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def info(self, message: str):
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def critical(self, message: str):
        self.logger.critical(message)

    def log_phase_start(self, phase_name: str):
        """Log the start of a processing phase."""
        self.info("-" * 40)
        self.info(f"Starting {phase_name}")
        self.info("-" * 40)

    def log_phase_complete(self, phase_name: str, count: int, duration: float):
        """Log the completion of a processing phase."""
        self.info(f"Completed {phase_name}")
        self.info(f"Records processed: {count:,}")
        self.info(f"Duration: {duration:.2f} seconds")

    def log_hierarchy_summary(self, summary: Dict[str, int]):
        """Log the size of the loaded reference hierarchy."""
        self.info(
            f"Reference hierarchy: {summary['divisions']:,} divisions, "
            f"{summary['districts']:,} districts, {summary['upazilas']:,} upazilas "
            f"({summary['geolocated_upazilas']:,} geolocated)"
        )

    def log_resolution_statistics(self, stats: Dict[str, int]):
        """Log resolver statistics."""
        total = stats.get('total_resolved', 0)
        complete = stats.get('complete', 0)
        rate = (complete / total * 100) if total > 0 else 0
        self.info(f"Resolutions: {total:,} ({complete:,} complete, {rate:.2f}%)")
        self.info(
            f"Hint matches - division: {stats.get('division_hint_matches', 0):,}, "
            f"district: {stats.get('district_hint_matches', 0):,}, "
            f"upazila: {stats.get('upazila_hint_matches', 0):,}"
        )
        self.info(f"Nearest-upazila fallbacks: {stats.get('nearest_fallbacks', 0):,}")
        self.info(f"Fully unresolved: {stats.get('unresolved', 0):,}")

    def log_file_operation(self, operation: str, file_path: str, record_count: int):
        """Log file operations."""
        self.info(f"{operation}: {file_path} ({record_count:,} records)")


def setup_logging(config) -> ResolverLogger:
    """
    Set up logging based on configuration.

    Args:
        config: ResolverConfig instance

    Returns:
        Configured ResolverLogger instance
    """
    log_file = None
    if config.log_file:
        log_file = config.log_file
    elif config.output_directory:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(config.output_directory) / f"resolver_log_{timestamp}.txt"

    return ResolverLogger(
        name="region_resolver",
        level=config.log_level,
        log_file=str(log_file) if log_file else None
    )
