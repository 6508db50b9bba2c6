"""
Common validation utilities for the portfolio API.

Validators collect every problem of a payload into a ``ValidationResult``
and expose the converted values in ``cleaned_data``. Controllers call
``raise_for_result`` to turn a failed result into a 400 response.
"""

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from portfolio.core.exceptions import ValidationError
from portfolio.domain.entities import DomainStatus, normalize_status

logger = logging.getLogger(__name__)

# Money columns are NUMERIC(12, 2)
MONEY_MAX = Decimal("9999999999.99")
CENT = Decimal("0.01")


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: List[str] = []
        self.is_valid: bool = True
        self.cleaned_data: Dict[str, Any] = {}
        self.first_error_field: Optional[str] = None

    def add_error(self, message: str, field: Optional[str] = None):
        """Add validation error."""
        error_msg = f"{field}: {message}" if field else message
        self.errors.append(error_msg)
        if self.is_valid:
            self.first_error_field = field
        self.is_valid = False
        logger.debug(f"Validation error: {error_msg}")


def raise_for_result(result: ValidationResult) -> Dict[str, Any]:
    """Return cleaned data or raise ValidationError with all messages joined."""
    if not result.is_valid:
        raise ValidationError("; ".join(result.errors), field=result.first_error_field)
    return result.cleaned_data


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


class BaseValidator:
    """Base validator with common validation methods."""

    def validate(
        self, data: Dict[str, Any]
    ) -> ValidationResult:  # pragma: no cover - interface definition
        raise NotImplementedError("Subclasses must implement validate")

    @staticmethod
    def validate_required_field(
        value: Any, field_name: str, result: ValidationResult
    ) -> bool:
        """Validate that a required field is present and not empty."""
        if _is_blank(value):
            result.add_error("is required", field_name)
            return False
        return True

    @staticmethod
    def validate_date(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[date]:
        """Validate and convert a YYYY-MM-DD date field."""
        if _is_blank(value):
            return None

        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        if isinstance(value, str):
            try:
                # Accept full ISO timestamps by keeping the calendar part
                return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
            except ValueError:
                result.add_error("invalid date, use YYYY-MM-DD", field_name)
                return None

        result.add_error("invalid date format", field_name)
        return None

    @staticmethod
    def validate_decimal(
        value: Any,
        field_name: str,
        result: ValidationResult,
        min_value: Optional[Decimal] = None,
        max_value: Optional[Decimal] = None,
    ) -> Optional[Decimal]:
        """Validate and convert decimal field."""
        if _is_blank(value):
            return None

        if isinstance(value, bool):
            result.add_error("must be a number", field_name)
            return None

        if isinstance(value, Decimal):
            decimal_value = value
        else:
            try:
                if isinstance(value, str):
                    value = value.strip().replace(" ", "")
                    # Accept a comma decimal separator (1234,56)
                    if "," in value and "." not in value:
                        value = value.replace(",", ".")
                decimal_value = Decimal(str(value))
            except (InvalidOperation, TypeError, ValueError):
                result.add_error("must be a number", field_name)
                return None

        if not decimal_value.is_finite():
            result.add_error("must be a number", field_name)
            return None

        if min_value is not None and decimal_value < min_value:
            result.add_error(f"must be at least {min_value}", field_name)
            return None

        if max_value is not None and decimal_value > max_value:
            result.add_error(f"must be at most {max_value}", field_name)
            return None

        return decimal_value

    @staticmethod
    def validate_money(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[Decimal]:
        """Validate a non-negative amount and round it to the cent."""
        amount = BaseValidator.validate_decimal(
            value, field_name, result, min_value=Decimal("0"), max_value=MONEY_MAX
        )
        if amount is None:
            return None
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def validate_integer(
        value: Any,
        field_name: str,
        result: ValidationResult,
        min_value: Optional[int] = None,
    ) -> Optional[int]:
        """Validate and convert integer field."""
        if _is_blank(value):
            return None

        if isinstance(value, bool):
            result.add_error("must be an integer", field_name)
            return None

        try:
            int_value = int(value)
        except (ValueError, TypeError):
            result.add_error("must be an integer", field_name)
            return None

        if min_value is not None and int_value < min_value:
            result.add_error(f"must be at least {min_value}", field_name)
            return None

        return int_value

    @staticmethod
    def validate_string(
        value: Any,
        field_name: str,
        result: ValidationResult,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> Optional[str]:
        """Validate string field."""
        if value is None:
            return None

        if not isinstance(value, str):
            value = str(value)

        value = value.strip()

        if min_length is not None and len(value) < min_length:
            result.add_error(f"must have at least {min_length} characters", field_name)
            return None

        if max_length is not None and len(value) > max_length:
            result.add_error(f"must have at most {max_length} characters", field_name)
            return None

        return value if value else None

    @staticmethod
    def validate_status(
        value: Any, field_name: str, result: ValidationResult
    ) -> Optional[str]:
        if _is_blank(value):
            return None
        status = normalize_status(str(value))
        if status is None:
            result.add_error(
                f"must be one of: {', '.join(DomainStatus.ALL)}", field_name
            )
        return status


class DomainValidator(BaseValidator):
    """Validator for a full domain record plus its optional sale fields."""

    REQUIRED_FIELDS = (
        "name",
        "registrar",
        "category",
        "purchaseDate",
        "expirationDate",
        "status",
    )

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        for field_name in self.REQUIRED_FIELDS:
            self.validate_required_field(data.get(field_name), field_name, result)

        cleaned = result.cleaned_data
        cleaned["name"] = self.validate_string(
            data.get("name"), "name", result, max_length=255
        )
        cleaned["registrar"] = self.validate_string(
            data.get("registrar"), "registrar", result, max_length=100
        )
        cleaned["category"] = self.validate_string(
            data.get("category"), "category", result, max_length=100
        )
        cleaned["purchase_date"] = self.validate_date(
            data.get("purchaseDate"), "purchaseDate", result
        )
        cleaned["expiration_date"] = self.validate_date(
            data.get("expirationDate"), "expirationDate", result
        )
        cleaned["status"] = self.validate_status(data.get("status"), "status", result)
        cleaned["purchase_price"] = self.validate_money(
            data.get("purchasePrice"), "purchasePrice", result
        )
        _validate_sale_fields(self, data, result)
        return result


class DomainChangesValidator(BaseValidator):
    """Validator for the partial update applied by a bulk edit."""

    ALLOWED_FIELDS = ("status", "registrar", "category")
    SALE_FIELDS = ("saleDate", "sellingPrice", "buyer")

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        cleaned = result.cleaned_data

        unknown = sorted(
            set(data) - set(self.ALLOWED_FIELDS) - set(self.SALE_FIELDS)
        )
        if unknown:
            result.add_error(f"unsupported fields: {', '.join(unknown)}", "changes")

        if "status" in data:
            if self.validate_required_field(data.get("status"), "status", result):
                cleaned["status"] = self.validate_status(
                    data.get("status"), "status", result
                )
        for field_name in ("registrar", "category"):
            if field_name in data:
                if self.validate_required_field(data.get(field_name), field_name, result):
                    cleaned[field_name] = self.validate_string(
                        data.get(field_name), field_name, result, max_length=100
                    )

        if not any(name in data for name in self.ALLOWED_FIELDS):
            result.add_error(
                f"at least one of {', '.join(self.ALLOWED_FIELDS)} is required",
                "changes",
            )

        _validate_sale_fields(self, data, result)
        return result


def _validate_sale_fields(
    validator: BaseValidator, data: Dict[str, Any], result: ValidationResult
) -> None:
    cleaned = result.cleaned_data
    cleaned["sale_date"] = validator.validate_date(
        data.get("saleDate"), "saleDate", result
    )
    cleaned["selling_price"] = validator.validate_money(
        data.get("sellingPrice"), "sellingPrice", result
    )
    cleaned["buyer"] = validator.validate_string(
        data.get("buyer"), "buyer", result, max_length=255
    )


class EvaluationValidator(BaseValidator):
    """Validator for evaluation entities."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        for field_name in ("domainId", "tool", "date", "estimatedValue"):
            self.validate_required_field(data.get(field_name), field_name, result)

        cleaned = result.cleaned_data
        cleaned["domain_id"] = self.validate_integer(
            data.get("domainId"), "domainId", result, min_value=1
        )
        cleaned["tool"] = self.validate_string(
            data.get("tool"), "tool", result, max_length=100
        )
        cleaned["evaluation_date"] = self.validate_date(
            data.get("date"), "date", result
        )
        cleaned["estimated_value"] = self.validate_money(
            data.get("estimatedValue"), "estimatedValue", result
        )
        return result


class RegistrationValidator(BaseValidator):
    """Validator for account registration."""

    def __init__(self, password_min_length: int):
        self.password_min_length = password_min_length

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        for field_name in ("username", "email", "password"):
            self.validate_required_field(data.get(field_name), field_name, result)

        cleaned = result.cleaned_data
        cleaned["username"] = self.validate_string(
            data.get("username"), "username", result, min_length=3, max_length=50
        )
        email = self.validate_string(data.get("email"), "email", result, max_length=100)
        if email and "@" not in email:
            result.add_error("invalid email format", "email")
        cleaned["email"] = email

        password = data.get("password")
        if isinstance(password, str) and password:
            if len(password) < self.password_min_length:
                result.add_error(
                    f"must have at least {self.password_min_length} characters",
                    "password",
                )
            cleaned["password"] = password
        elif password is not None and not isinstance(password, str):
            result.add_error("must be a string", "password")
        return result


class CustomListsValidator(BaseValidator):
    """Validator for the custom lists settings document."""

    FIELDS = {
        "registrars": "registrars",
        "categories": "categories",
        "evaluationTools": "evaluation_tools",
    }

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        if not isinstance(data, dict):
            result.add_error("settings must be a JSON object")
            return result

        for wire_name, attr in self.FIELDS.items():
            value = data.get(wire_name, [])
            if not isinstance(value, list):
                result.add_error("must be a list of strings", wire_name)
                continue
            items: List[str] = []
            for item in value:
                if not isinstance(item, str):
                    result.add_error("must be a list of strings", wire_name)
                    break
                stripped = item.strip()
                if stripped and stripped not in items:
                    items.append(stripped)
            result.cleaned_data[attr] = items
        return result
