"""
Custom Exceptions for the Test Bench
Provides structured error handling across the application
"""

from typing import Optional, Dict, Any, List


class TestBenchException(Exception):
    """Base exception for all test bench errors"""

    # Keeps pytest from collecting this class as a test case
    __test__ = False

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response"""
        return {
            "error": self.message,
            "code": self.error_code,
            "details": self.details
        }


# Configuration Exceptions
class ConfigurationError(TestBenchException):
    """Raised when required settings are missing"""

    def __init__(self, message: str, missing: Optional[List[str]] = None, hint: Optional[str] = None):
        details: Dict[str, Any] = {"missing": missing or []}
        if hint:
            details["hint"] = hint
        super().__init__(
            message=message,
            error_code="CONFIGURATION_MISSING",
            details=details,
            status_code=500
        )


class FeatureUnavailableError(TestBenchException):
    """Raised when a feature flag disables an endpoint"""

    def __init__(self, feature: str):
        super().__init__(
            message="Not available",
            error_code="NOT_AVAILABLE",
            details={"feature": feature},
            status_code=404
        )


# Authentication Exceptions
class AuthenticationError(TestBenchException):
    """Raised when authentication fails"""

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            error_code="AUTH_FAILED",
            details=details,
            status_code=401
        )


# Validation Exceptions
class ValidationError(TestBenchException):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field} if field else {},
            status_code=400
        )


class InvalidPhoneNumberError(ValidationError):
    """Raised when phone number is invalid"""

    def __init__(self, phone_number: str, field: str = "phoneNumber"):
        super().__init__(
            message=f"Invalid phone number format: {phone_number}",
            field=field
        )
        self.error_code = "INVALID_PHONE_NUMBER"
        self.details["hint"] = "Use E.164 format (e.g., +14155551234)"


class InvalidServiceError(ValidationError):
    """Raised when a log service name is not allow-listed"""

    def __init__(self, service: str, allowed: List[str]):
        super().__init__(message="Invalid service", field="service")
        self.error_code = "INVALID_SERVICE"
        self.details.update({"service": service, "allowed": allowed})


class NotFoundError(TestBenchException):
    """Raised when a locally held record is not found"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            details=details,
            status_code=404
        )


# Service Exceptions
class ServiceError(TestBenchException):
    """Base exception for external service errors"""
    pass


class LogSourceError(ServiceError):
    """Raised when CloudWatch or docker-compose fails to return logs"""

    def __init__(self, message: str, source: str):
        super().__init__(
            message=f"Failed to fetch logs: {message}",
            error_code="LOG_SOURCE_ERROR",
            details={"source": source},
            status_code=500
        )


class LiveKitServiceError(ServiceError):
    """Raised when the LiveKit server API fails"""

    def __init__(self, message: str, operation: str):
        super().__init__(
            message=f"Failed to {operation}: {message}",
            error_code="LIVEKIT_ERROR",
            details={"operation": operation},
            status_code=500
        )


class ControlAPIError(ServiceError):
    """Raised when the backend Control API fails or rejects a request"""

    def __init__(self, message: str, url: str, upstream_status: Optional[int] = None, hint: Optional[str] = None):
        details: Dict[str, Any] = {"backendUrl": url}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        if hint:
            details["hint"] = hint
        super().__init__(
            message=message,
            error_code="CONTROL_API_ERROR",
            details=details,
            status_code=upstream_status or 502
        )
