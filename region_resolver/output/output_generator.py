"""
Output generation for batch resolution runs.

This module provides the OutputGenerator class for writing timestamped
result CSVs and a plain-text summary report into the output directory.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from ..batch import BatchStats
from ..exceptions import FileAccessError


class OutputGenerator:
    """
    Writes batch results.

    Files are named after their content with a shared run timestamp:
    all rows, rows with errors, and the summary report.
    """

    def __init__(self, output_directory: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the OutputGenerator.

        Args:
            output_directory: Directory receiving the generated files
            logger: Optional logger instance for logging operations
        """
        self.output_directory = Path(output_directory)
        self.logger = logger or logging.getLogger(__name__)
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        self.output_directory.mkdir(parents=True, exist_ok=True)

        self.file_patterns = {
            'all_results': 'resolved_locations_{timestamp}.csv',
            'invalid_rows': 'invalid_rows_{timestamp}.csv',
            'summary_report': 'resolution_summary_report_{timestamp}.txt'
        }

    def _path_for(self, output_type: str) -> Path:
        return self.output_directory / self.file_patterns[output_type].format(
            timestamp=self.timestamp
        )

    def generate_all_outputs(self, results: pd.DataFrame, stats: BatchStats,
                             input_file: Optional[str] = None) -> Dict[str, str]:
        """
        Generate all output files for a batch run.

        Args:
            results: Results DataFrame from BatchResolver
            stats: Batch statistics
            input_file: Optional input path, echoed in the report

        Returns:
            Dictionary mapping output type to generated file path
        """
        self.logger.info("Starting output file generation")
        generated_files = {}

        generated_files['all_results'] = self._write_csv('all_results', results)

        if 'error' in results.columns:
            invalid = results[results['error'].notna()]
            if not invalid.empty:
                generated_files['invalid_rows'] = self._write_csv('invalid_rows', invalid)

        generated_files['summary_report'] = self._write_summary_report(stats, input_file)

        self.logger.info(f"Generated {len(generated_files)} output files")
        return generated_files

    def _write_csv(self, output_type: str, df: pd.DataFrame) -> str:
        path = self._path_for(output_type)
        try:
            df.to_csv(path, index=False, encoding='utf-8')
        except OSError as e:
            raise FileAccessError(
                f"Could not write {output_type} file", file_path=str(path),
                operation='write', original_error=e
            )
        self.logger.info(f"Wrote {output_type}: {path} ({len(df):,} records)")
        return str(path)

    def _write_summary_report(self, stats: BatchStats, input_file: Optional[str]) -> str:
        lines = [
            "=" * 60,
            "LOCATION RESOLUTION SUMMARY",
            "=" * 60,
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        ]
        if input_file:
            lines.append(f"Input file: {input_file}")
        lines.extend([
            "",
            f"Total rows: {stats.total_rows:,}",
            f"Fully resolved: {stats.complete:,} ({stats.get_resolution_rate():.2f}%)",
            f"Partially resolved: {stats.partial:,}",
            f"Unresolved: {stats.unresolved:,}",
            f"Invalid rows: {stats.invalid:,}",
            "",
            "Level resolutions by method:",
        ])
        if stats.methods:
            for method, count in sorted(stats.methods.items()):
                lines.append(f"  {method}: {count:,}")
        else:
            lines.append("  none")

        error_counts = stats.error_summary.get('error_counts', {})
        if error_counts:
            lines.extend(["", "Errors by type:"])
            for error_type, count in sorted(error_counts.items()):
                lines.append(f"  {error_type}: {count:,}")
            lines.append(f"Most common error: {stats.error_summary['most_common_error']}")
        lines.extend(["", f"Processing time: {stats.processing_time:.2f} seconds"])

        path = self._path_for('summary_report')
        try:
            path.write_text("\n".join(lines) + "\n", encoding='utf-8')
        except OSError as e:
            raise FileAccessError(
                "Could not write summary report", file_path=str(path),
                operation='write', original_error=e
            )
        self.logger.info(f"Wrote summary report: {path}")
        return str(path)
