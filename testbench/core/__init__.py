"""Core module for configuration, settings, and shared utilities"""

from .config import settings, get_settings, Settings
from .logging import setup_logging, get_logger
from .exceptions import (
    TestBenchException,
    ConfigurationError,
    FeatureUnavailableError,
    AuthenticationError,
    ValidationError,
    InvalidPhoneNumberError,
    InvalidServiceError,
    NotFoundError,
    ServiceError,
    LogSourceError,
    LiveKitServiceError,
    ControlAPIError
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    "Settings",
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "TestBenchException",
    "ConfigurationError",
    "FeatureUnavailableError",
    "AuthenticationError",
    "ValidationError",
    "InvalidPhoneNumberError",
    "InvalidServiceError",
    "NotFoundError",
    "ServiceError",
    "LogSourceError",
    "LiveKitServiceError",
    "ControlAPIError"
]
