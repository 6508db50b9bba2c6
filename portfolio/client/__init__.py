"""Python client for the portfolio API with the local view engine."""

from .api_client import ApiClient, ApiError
from .bulk import BulkOutcome, bulk_delete, bulk_update

__all__ = ["ApiClient", "ApiError", "BulkOutcome", "bulk_delete", "bulk_update"]
