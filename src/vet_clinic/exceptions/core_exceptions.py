"""
Core exceptions for the vet-clinic package.

Every error the clinic raises on purpose derives from
:class:`VetClinicException`. The web layer maps the families below to HTTP
status codes: not found (404), concurrent modification (409), validation
(400) and everything else (500).
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, urlunparse


class VetClinicException(Exception):
    """
    Base exception class for all vet-clinic exceptions.

    Attributes:
        message: Human-readable error message, shown on the error page
        error_code: Machine-readable code (defaults to the class name)
        details: Extra context for logs and the error page
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def log_error(
        self, logger: Optional[logging.Logger] = None, level: int = logging.ERROR
    ) -> None:
        """
        Log the exception with its code and details attached as ``extra``.

        Args:
            logger: Logger instance to use (module logger if None)
            level: Logging level to use
        """
        if logger is None:
            logger = logging.getLogger(__name__)

        logger.log(
            level,
            f"{self.error_code}: {self.message}",
            extra={
                "exception_data": {
                    "error_type": self.__class__.__name__,
                    "error_code": self.error_code,
                    "details": self.details,
                }
            },
        )

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class NotFoundException(VetClinicException):
    """Raised when a requested owner or pet does not exist."""

    def __init__(
        self,
        entity: str,
        identifier: Any,
        message: Optional[str] = None,
    ):
        super().__init__(
            message=message or f"{entity} with id {identifier} was not found",
            error_code="NOT_FOUND",
            details={"entity": entity, "identifier": str(identifier)},
        )
        self.entity = entity
        self.identifier = identifier


class DatabaseException(VetClinicException):
    """Base exception for persistence failures."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, error_code or "DATABASE_ERROR", details)
        self.original_error = original_error
        if original_error is not None:
            self.details.setdefault("original_error", str(original_error))


class ConnectionException(DatabaseException):
    """Raised when the database cannot be reached or initialized."""

    def __init__(
        self,
        message: str = "Database connection failed",
        database_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if database_url:
            details["database_url"] = self._strip_credentials(database_url)

        super().__init__(
            message=message,
            error_code="DATABASE_CONNECTION_ERROR",
            details=details,
            original_error=original_error,
        )

    @staticmethod
    def _strip_credentials(url: str) -> str:
        """Drop user and password from a URL before it is logged."""
        parsed = urlparse(url)
        if not parsed.hostname:
            return url
        netloc = parsed.hostname
        if parsed.port:
            netloc = f"{netloc}:{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))


class ConcurrentModificationException(DatabaseException):
    """
    Raised when an owner aggregate was changed by another request.

    Owners are versioned; saving a copy that was loaded before someone
    else's save committed fails with this error instead of overwriting
    the newer row.
    """

    def __init__(
        self,
        message: str = "Record was modified by another user",
        entity: Optional[str] = None,
        identifier: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {}
        if entity:
            details["entity"] = entity
        if identifier is not None:
            details["identifier"] = str(identifier)

        super().__init__(
            message=message,
            error_code="CONCURRENT_MODIFICATION",
            details=details,
            original_error=original_error,
        )


class ValidationException(VetClinicException):
    """Base exception for rejected input that reached the domain layer."""

    def __init__(
        self,
        message: str = "Validation failed",
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class BusinessRuleException(ValidationException):
    """Raised when an operation would break an aggregate rule."""

    def __init__(
        self,
        message: str = "Business rule validation failed",
        rule_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error_code: str = "BUSINESS_RULE_ERROR",
    ):
        details: Dict[str, Any] = {}
        if rule_name:
            details["rule_name"] = rule_name
        if context:
            details["context"] = context
        super().__init__(message, error_code, details)
        self.rule_name = rule_name


class PetNotFoundException(BusinessRuleException):
    """Raised when a visit targets a pet id that the owner does not have."""

    def __init__(self, pet_id: Optional[int], owner_id: Optional[int] = None):
        super().__init__(
            message=f"Pet with id {pet_id} does not belong to owner {owner_id}",
            rule_name="pet_belongs_to_owner",
            context={"pet_id": pet_id, "owner_id": owner_id},
            error_code="PET_NOT_FOUND",
        )
        self.pet_id = pet_id
        self.owner_id = owner_id


class DatabaseConfigException(VetClinicException):
    """Raised when the configured database URL is unusable."""

    def __init__(
        self,
        message: str = "Database configuration error",
        config_key: Optional[str] = None,
    ):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, "DATABASE_CONFIG_ERROR", details)


def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Group Pydantic validation errors by form field.

    Args:
        errors: ``ValidationError.errors()`` output

    Returns:
        Field name (the form alias) to list of user-facing messages
    """
    formatted_errors: Dict[str, List[str]] = {}

    for error in errors:
        field_path = ".".join(str(loc) for loc in error.get("loc", [])) or "root"
        message = error.get("msg", "Validation error")
        error_type = error.get("type", "unknown")

        if error_type == "value_error":
            # Pydantic prefixes the raised message with "Value error, "
            original = error.get("ctx", {}).get("error")
            message = str(original) if original is not None else message
        elif error_type == "missing":
            message = "This field is required"
        elif error_type.endswith("_type"):
            message = f"Invalid type: {message}"

        formatted_errors.setdefault(field_path, []).append(message)

    return formatted_errors


def create_error_response(exception: VetClinicException) -> Dict[str, Any]:
    """Build the payload rendered on the error page."""
    error: Dict[str, Any] = {
        "type": exception.__class__.__name__,
        "code": exception.error_code,
        "message": exception.message,
    }
    if exception.details:
        error["details"] = exception.details
    return {"success": False, "error": error}
