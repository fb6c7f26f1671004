"""
Batch resolution of CSV rows.

Each input row carries latitude/longitude and optional state, district and
upazila hints. Rows that fail validation are kept in the output with their
error message instead of stopping the batch.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd
from tqdm import tqdm

from .exceptions import ValidationError
from .models import AddressHints
from .resolver import RegionResolver
from .utils.data_utils import is_null_or_empty, safe_string_conversion
from .utils.error_handler import ErrorHandler, create_error_context

REQUIRED_COLUMNS = ['latitude', 'longitude']
HINT_COLUMNS = ['state', 'district', 'upazila']


@dataclass
class BatchStats:
    """Statistics tracking for a batch run."""

    total_rows: int = 0
    complete: int = 0
    partial: int = 0
    unresolved: int = 0
    invalid: int = 0
    methods: Dict[str, int] = field(default_factory=dict)
    error_summary: Dict[str, Any] = field(default_factory=dict)
    processing_time: float = 0.0

    def get_resolution_rate(self) -> float:
        """Percentage of rows resolved on all three levels."""
        if self.total_rows == 0:
            return 0.0
        return (self.complete / self.total_rows) * 100


class BatchResolver:
    """Resolves every row of a DataFrame with a RegionResolver."""

    def __init__(self, resolver: RegionResolver, logger: Optional[logging.Logger] = None,
                 show_progress: bool = True):
        self.resolver = resolver
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.show_progress = show_progress

    def resolve_dataframe(self, df: pd.DataFrame) -> tuple:
        """
        Resolve all rows.

        Args:
            df: Input rows; must contain latitude and longitude columns

        Returns:
            Tuple of (results DataFrame, BatchStats). The results keep the
            input columns and add ids, names, per-level methods and an error column.

        Raises:
            ValidationError: If required columns are missing
        """
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValidationError(
                f"Missing required columns in batch input: {missing}",
                field_name='columns',
                invalid_value=list(df.columns),
                validation_rules=[f"requires {', '.join(REQUIRED_COLUMNS)}"]
            )

        self.error_handler.reset_error_counts()
        start = time.time()
        stats = BatchStats(total_rows=len(df))
        hierarchy = self.resolver.hierarchy
        rows = []

        self.logger.info(f"Resolving {len(df):,} batch rows")

        for idx, row in tqdm(df.iterrows(), total=len(df), desc="Resolving locations",
                             disable=not self.show_progress):
            output = row.to_dict()
            output.update({
                'division_id': None, 'district_id': None, 'upazila_id': None,
                'division_name': None, 'district_name': None, 'upazila_name': None,
                'division_method': None, 'district_method': None, 'upazila_method': None,
                'error': None
            })

            hint_values = {}
            for column in HINT_COLUMNS:
                value = row.get(column)
                hint_values[column] = None if is_null_or_empty(value) else safe_string_conversion(value)
            hints = AddressHints(**hint_values)

            try:
                result = self.resolver.resolve(row.get('latitude'), row.get('longitude'), hints)
            except ValidationError as e:
                self.error_handler.record_error(e, create_error_context('batch_resolve', row=idx))
                output['error'] = e.message
                stats.invalid += 1
                rows.append(output)
                continue

            output.update({
                'division_id': result.division_id,
                'district_id': result.district_id,
                'upazila_id': result.upazila_id,
            })
            if result.division_id is not None:
                output['division_name'] = hierarchy.get_division(result.division_id).name
            if result.district_id is not None:
                output['district_name'] = hierarchy.get_district(result.district_id).name
            if result.upazila_id is not None:
                output['upazila_name'] = hierarchy.get_upazila(result.upazila_id).name

            for level, method in result.methods.items():
                output[f'{level}_method'] = method
                stats.methods[method] = stats.methods.get(method, 0) + 1

            if result.is_complete():
                stats.complete += 1
            elif result.is_empty():
                stats.unresolved += 1
            else:
                stats.partial += 1
            rows.append(output)

        stats.processing_time = time.time() - start
        stats.error_summary = self.error_handler.get_error_summary()
        self.logger.info(
            f"Batch complete: {stats.complete:,} complete, {stats.partial:,} partial, "
            f"{stats.unresolved:,} unresolved, {stats.invalid:,} invalid "
            f"in {stats.processing_time:.2f}s"
        )

        results = pd.DataFrame(rows)
        for column in ('division_id', 'district_id', 'upazila_id'):
            if column in results.columns:
                results[column] = results[column].astype('Int64')
        return results, stats
