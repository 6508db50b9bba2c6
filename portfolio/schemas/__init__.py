"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the API contracts
and convert between the JSON wire format and domain entities.
"""

from .dtos import (
    AuthTokenResponse,
    BulkDeleteRequest,
    BulkUpdateRequest,
    CustomListsRequest,
    DomainResponse,
    DomainWriteRequest,
    EvaluationCreateRequest,
    EvaluationResponse,
    LoginRequest,
    RegisterRequest,
    SaleResponse,
    UserResponse,
    batch_result_to_dict,
    custom_lists_to_dict,
    domain_from_dict,
    sale_from_dict,
    statistics_to_dict,
)

__all__ = [
    # Domain DTOs
    "DomainWriteRequest",
    "DomainResponse",
    "BulkDeleteRequest",
    "BulkUpdateRequest",
    "batch_result_to_dict",
    "domain_from_dict",
    # Evaluation and sale DTOs
    "EvaluationCreateRequest",
    "EvaluationResponse",
    "SaleResponse",
    "sale_from_dict",
    # Settings and statistics
    "CustomListsRequest",
    "custom_lists_to_dict",
    "statistics_to_dict",
    # Auth DTOs
    "LoginRequest",
    "RegisterRequest",
    "UserResponse",
    "AuthTokenResponse",
]
