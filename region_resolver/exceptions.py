"""
Custom exception classes for the region resolver application.

This module defines custom exception classes for the different kinds of
errors that can occur while loading reference data, resolving locations
and publishing realtime events.
"""

from typing import Optional, List, Dict, Any


class RegionResolverError(Exception):
    """Base exception class for all region resolver errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base resolver error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class ValidationError(RegionResolverError):
    """Exception raised for request and data validation errors."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Any = None, validation_rules: Optional[List[str]] = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            field_name: Name of the field that failed validation
            invalid_value: The invalid value that caused the error
            validation_rules: List of validation rules that were violated
        """
        context = {
            'field_name': field_name,
            'invalid_value': str(invalid_value) if invalid_value is not None else None,
            'validation_rules': validation_rules or []
        }
        super().__init__(message, error_code='VALIDATION_ERROR', context=context)
        self.field_name = field_name
        self.invalid_value = invalid_value
        self.validation_rules = validation_rules or []


class DataLoadError(RegionResolverError):
    """Exception raised for reference data loading errors."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        """
        Initialize data load error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='DATA_LOAD_ERROR', context=context)
        self.file_path = file_path
        self.original_error = original_error


class FileAccessError(RegionResolverError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, write, create, etc.)
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class DataQualityError(RegionResolverError):
    """Exception raised when reference data breaks the hierarchy invariants."""

    def __init__(self, message: str, level: Optional[str] = None,
                 invalid_ids: Optional[List[Any]] = None,
                 recommendations: Optional[List[str]] = None):
        """
        Initialize data quality error.

        Args:
            message: Human-readable error message
            level: Hierarchy level where the problem was found
            invalid_ids: Identifiers of the offending records
            recommendations: Suggested fixes for the data
        """
        context = {
            'level': level,
            'invalid_ids': [str(i) for i in (invalid_ids or [])][:20],
            'invalid_count': len(invalid_ids or []),
            'recommendations': recommendations or []
        }
        super().__init__(message, error_code='DATA_QUALITY_ERROR', context=context)
        self.level = level
        self.invalid_ids = invalid_ids or []
        self.recommendations = recommendations or []


class ConfigurationError(RegionResolverError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


class RealtimeError(RegionResolverError):
    """Exception raised when a realtime event cannot be delivered."""

    def __init__(self, message: str, channel: Optional[str] = None,
                 event: Optional[str] = None, original_error: Optional[Exception] = None):
        context = {
            'channel': channel,
            'event': event,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='REALTIME_ERROR', context=context)
        self.channel = channel
        self.event = event
        self.original_error = original_error


def create_validation_error(field_name: str, value: Any, rules: List[str],
                            message: Optional[str] = None) -> ValidationError:
    """
    Create a standardized validation error.

    Args:
        field_name: Name of the field that failed validation
        value: The invalid value
        rules: List of validation rules that were violated
        message: Optional message overriding the generated one

    Returns:
        ValidationError instance
    """
    if message is None:
        message = f"Validation failed for field '{field_name}': {', '.join(rules)}"
    return ValidationError(
        message=message,
        field_name=field_name,
        invalid_value=value,
        validation_rules=rules
    )


def get_error_severity(error: Exception) -> str:
    """
    Determine the severity level of an error.

    Args:
        error: Exception to evaluate

    Returns:
        Severity level ('low', 'medium', 'high', 'critical')
    """
    if isinstance(error, ValidationError):
        return 'low'
    if isinstance(error, RealtimeError):
        return 'medium'
    if isinstance(error, (DataLoadError, FileAccessError, ConfigurationError)):
        return 'high'
    if isinstance(error, DataQualityError):
        return 'critical'
    if isinstance(error, RegionResolverError):
        return 'medium'
    return 'high'
