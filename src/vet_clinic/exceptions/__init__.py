"""
Custom exceptions for the vet-clinic package.
"""

from .core_exceptions import (
    BusinessRuleException,
    ConcurrentModificationException,
    ConnectionException,
    DatabaseConfigException,
    DatabaseException,
    NotFoundException,
    PetNotFoundException,
    ValidationException,
    VetClinicException,
    create_error_response,
    format_validation_errors,
)

__all__ = [
    # Exception classes
    "VetClinicException",
    "NotFoundException",
    "DatabaseException",
    "ConnectionException",
    "ConcurrentModificationException",
    "ValidationException",
    "BusinessRuleException",
    "PetNotFoundException",
    "DatabaseConfigException",
    # Utility functions
    "format_validation_errors",
    "create_error_response",
]
