"""
Reference data loading and validation.

This module provides the ReferenceDataLoader class for loading division,
district and upazila seed CSV files into a ReferenceHierarchy.
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import ResolverConfig
from .exceptions import DataLoadError, ValidationError, FileAccessError, DataQualityError
from .hierarchy import ReferenceHierarchy
from .models import Division, District, Upazila
from .utils.data_utils import (
    clean_dataframe_strings,
    convert_numeric_columns,
    detect_duplicates,
    get_data_quality_summary
)
from .utils.error_handler import create_error_context, log_error_details


class ReferenceDataLoader:
    """
    Loads the administrative hierarchy from CSV files.

    Required columns per file:
        divisions: id, name
        districts: id, name, division_id
        upazilas:  id, name, district_id (optional latitude, longitude)
    """

    DIVISION_COLUMNS = ['id', 'name']
    DISTRICT_COLUMNS = ['id', 'name', 'division_id']
    UPAZILA_COLUMNS = ['id', 'name', 'district_id']

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the loader.

        Args:
            logger: Optional logger instance for logging operations
        """
        self.logger = logger or logging.getLogger(__name__)

    def load(self, divisions_file: str, districts_file: str,
             upazilas_file: str) -> ReferenceHierarchy:
        """
        Load all three levels and build the hierarchy.

        Args:
            divisions_file: Path to divisions CSV
            districts_file: Path to districts CSV
            upazilas_file: Path to upazilas CSV

        Returns:
            Validated ReferenceHierarchy

        Raises:
            FileAccessError: If a file is missing or unreadable
            DataLoadError: If a file is empty or cannot be parsed
            ValidationError: If required columns are missing
            DataQualityError: If identifiers repeat or parents are missing
        """
        divisions = self.load_divisions(divisions_file)
        districts = self.load_districts(districts_file)
        upazilas = self.load_upazilas(upazilas_file)

        hierarchy = ReferenceHierarchy(divisions, districts, upazilas, logger=self.logger)
        self.logger.info(f"Loaded reference hierarchy: {hierarchy.summary()}")
        return hierarchy

    def load_from_config(self, config: ResolverConfig) -> ReferenceHierarchy:
        return self.load(config.divisions_file, config.districts_file, config.upazilas_file)

    def load_default(self) -> ReferenceHierarchy:
        """Load the seed data shipped with the package."""
        return self.load_from_config(ResolverConfig())

    def load_divisions(self, file_path: str) -> List[Division]:
        df = self._prepare(file_path, 'divisions', self.DIVISION_COLUMNS, {'id': 'int'})
        return [Division(id=row.id, name=row.name) for row in df.itertuples(index=False)]

    def load_districts(self, file_path: str) -> List[District]:
        df = self._prepare(
            file_path, 'districts', self.DISTRICT_COLUMNS, {'id': 'int', 'division_id': 'int'}
        )
        return [
            District(id=row.id, name=row.name, division_id=row.division_id)
            for row in df.itertuples(index=False)
        ]

    def load_upazilas(self, file_path: str) -> List[Upazila]:
        df = self._prepare(
            file_path, 'upazilas', self.UPAZILA_COLUMNS,
            {'id': 'int', 'district_id': 'int', 'latitude': 'float', 'longitude': 'float'}
        )

        for column in ('latitude', 'longitude'):
            if column not in df.columns:
                df[column] = None

        df = self._clear_invalid_coordinates(df, file_path)

        return [
            Upazila(
                id=row.id,
                name=row.name,
                district_id=row.district_id,
                latitude=None if pd.isna(row.latitude) else float(row.latitude),
                longitude=None if pd.isna(row.longitude) else float(row.longitude)
            )
            for row in df.itertuples(index=False)
        ]

    def _prepare(self, file_path: str, level: str, required_columns: List[str],
                 numeric_columns: dict) -> pd.DataFrame:
        df = self._read_csv(file_path, level)
        self._validate_columns(df, required_columns, level, file_path)

        df = clean_dataframe_strings(df, ['name'])
        df = convert_numeric_columns(df, numeric_columns)

        invalid_mask = df[required_columns].isnull().any(axis=1) | (df['name'] == '')
        if invalid_mask.any():
            self.logger.warning(
                f"DATA QUALITY: dropping {int(invalid_mask.sum())} {level} row(s) "
                f"with missing or non-numeric identifiers or blank names in {file_path}"
            )
            df = df[~invalid_mask]

        if df.empty:
            raise DataLoadError(f"No valid {level} records in {file_path}", file_path=file_path)

        duplicates = detect_duplicates(df, ['id'])
        if not duplicates.empty:
            duplicate_ids = sorted(set(duplicates['id'].tolist()))
            raise DataQualityError(
                f"Duplicate {level} identifiers in {file_path}: {duplicate_ids}",
                level=level,
                invalid_ids=duplicate_ids,
                recommendations=[f"Remove repeated ids from {Path(file_path).name}"]
            )

        self.logger.debug(f"{level.capitalize()} data quality: {get_data_quality_summary(df)}")

        return df.sort_values('id', kind='stable').reset_index(drop=True)

    def _read_csv(self, file_path: str, level: str) -> pd.DataFrame:
        self.logger.info(f"Loading {level} from: {file_path}")

        path = Path(file_path)
        if not path.exists():
            raise FileAccessError(
                f"{level.capitalize()} file not found: {file_path}",
                file_path=str(file_path),
                operation="read"
            )
        if not path.is_file():
            raise FileAccessError(
                f"Path is not a file: {file_path}",
                file_path=str(file_path),
                operation="read"
            )

        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=True)
        except pd.errors.EmptyDataError as e:
            raise DataLoadError(
                f"{level.capitalize()} file is empty or contains no valid data",
                file_path=str(file_path),
                original_error=e
            )
        except pd.errors.ParserError as e:
            raise DataLoadError(
                f"Error parsing {level} CSV file: {str(e)}",
                file_path=str(file_path),
                original_error=e
            )
        except PermissionError as e:
            raise FileAccessError(
                f"Permission denied accessing {level} file: {file_path}",
                file_path=str(file_path),
                operation="read",
                original_error=e
            )
        except (OSError, UnicodeDecodeError) as e:
            context = create_error_context(operation=f"load_{level}", file_path=str(file_path))
            log_error_details(self.logger, e, context)
            raise DataLoadError(
                f"Unexpected error loading {level} from {file_path}: {str(e)}",
                file_path=str(file_path),
                original_error=e
            )

        if df.empty:
            raise DataLoadError(
                f"{level.capitalize()} file contains no data", file_path=str(file_path)
            )

        df.columns = [str(c).strip().lower() for c in df.columns]
        self.logger.info(f"Loaded {len(df)} {level} records")
        return df

    def _validate_columns(self, df: pd.DataFrame, required_columns: List[str],
                          level: str, file_path: str):
        missing = [c for c in required_columns if c not in df.columns]
        if missing:
            raise ValidationError(
                f"Missing required columns in {level} file {file_path}: {missing}",
                field_name='columns',
                invalid_value=list(df.columns),
                validation_rules=[f"requires {', '.join(required_columns)}"]
            )

    def _clear_invalid_coordinates(self, df: pd.DataFrame, file_path: str) -> pd.DataFrame:
        df = df.copy()
        lat = pd.to_numeric(df['latitude'], errors='coerce')
        lon = pd.to_numeric(df['longitude'], errors='coerce')

        out_of_range = lat.notna() & lon.notna() & (
            (lat.abs() > 90) | (lon.abs() > 180)
        )
        partial = lat.isna() ^ lon.isna()
        invalid = out_of_range | partial

        if invalid.any():
            self.logger.warning(
                f"DATA QUALITY: clearing coordinates of {int(invalid.sum())} upazila(s) "
                f"with partial or out-of-range values in {file_path}"
            )
            lat[invalid] = float('nan')
            lon[invalid] = float('nan')

        df['latitude'] = lat
        df['longitude'] = lon
        return df
