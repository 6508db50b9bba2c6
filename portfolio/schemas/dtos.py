"""
Data Transfer Objects (DTOs) for the JSON API.

Request DTOs parse a camelCase body into domain entities, raising
ValidationError with every problem found. Response DTOs turn entities back
into the wire format: dates as ``YYYY-MM-DD`` and money as JSON numbers.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from portfolio.core.exceptions import ValidationError
from portfolio.core.validation import (
    CustomListsValidator,
    DomainChangesValidator,
    DomainValidator,
    EvaluationValidator,
    RegistrationValidator,
    raise_for_result,
)
from portfolio.domain.entities import (
    BatchResult,
    CustomLists,
    Domain,
    Evaluation,
    Sale,
    SaleDetails,
    User,
)
from portfolio.domain.statistics import PortfolioStatistics


def _require_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _number(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _sale_details(cleaned: Dict[str, Any]) -> Optional[SaleDetails]:
    details = SaleDetails(
        sale_date=cleaned.get("sale_date"),
        selling_price=cleaned.get("selling_price"),
        buyer=cleaned.get("buyer"),
    )
    if details.sale_date is None and details.selling_price is None and not details.buyer:
        return None
    return details


@dataclass
class DomainWriteRequest:
    """DTO for creating or replacing a domain."""

    domain: Domain
    sale: Optional[SaleDetails] = None

    @classmethod
    def from_json(cls, data: Any) -> "DomainWriteRequest":
        cleaned = raise_for_result(DomainValidator().validate(_require_object(data)))
        try:
            domain = Domain(
                name=cleaned["name"],
                registrar=cleaned["registrar"],
                category=cleaned["category"],
                purchase_date=cleaned["purchase_date"],
                expiration_date=cleaned["expiration_date"],
                status=cleaned["status"],
                purchase_price=cleaned["purchase_price"],
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return cls(domain=domain, sale=_sale_details(cleaned))


def _parse_ids(data: Dict[str, Any]) -> List[int]:
    raw_ids = data.get("ids")
    if not isinstance(raw_ids, list) or not raw_ids:
        raise ValidationError("ids must be a non-empty list", field="ids")

    ids: List[int] = []
    for raw in raw_ids:
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            raise ValidationError("ids must contain positive integers", field="ids")
        if raw not in ids:
            ids.append(raw)
    return ids


@dataclass
class BulkDeleteRequest:
    ids: List[int]

    @classmethod
    def from_json(cls, data: Any) -> "BulkDeleteRequest":
        return cls(ids=_parse_ids(_require_object(data)))


@dataclass
class BulkUpdateRequest:
    """DTO for applying one partial change to several domains."""

    ids: List[int]
    changes: Dict[str, Any] = field(default_factory=dict)
    sale: Optional[SaleDetails] = None

    @classmethod
    def from_json(cls, data: Any) -> "BulkUpdateRequest":
        data = _require_object(data)
        ids = _parse_ids(data)
        raw_changes = data.get("changes")
        if not isinstance(raw_changes, dict):
            raise ValidationError("changes must be a JSON object", field="changes")

        cleaned = raise_for_result(DomainChangesValidator().validate(raw_changes))
        changes = {
            name: cleaned[name]
            for name in DomainChangesValidator.ALLOWED_FIELDS
            if cleaned.get(name) is not None
        }
        return cls(ids=ids, changes=changes, sale=_sale_details(cleaned))


@dataclass
class EvaluationCreateRequest:
    evaluation: Evaluation

    @classmethod
    def from_json(cls, data: Any) -> "EvaluationCreateRequest":
        cleaned = raise_for_result(EvaluationValidator().validate(_require_object(data)))
        try:
            evaluation = Evaluation(**cleaned)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return cls(evaluation=evaluation)


@dataclass
class CustomListsRequest:
    custom_lists: CustomLists

    @classmethod
    def from_json(cls, data: Any) -> "CustomListsRequest":
        cleaned = raise_for_result(CustomListsValidator().validate(data))
        return cls(custom_lists=CustomLists(**cleaned))


@dataclass
class LoginRequest:
    """DTO for login requests; ``username`` may also hold an email."""

    identifier: str
    password: str

    @classmethod
    def from_json(cls, data: Any) -> "LoginRequest":
        data = _require_object(data)
        identifier = data.get("username") or data.get("identifier") or data.get("email")
        password = data.get("password")
        if not isinstance(identifier, str) or not identifier.strip():
            raise ValidationError("Username and password are required", field="username")
        if not isinstance(password, str) or not password:
            raise ValidationError("Username and password are required", field="password")
        return cls(identifier=identifier.strip(), password=password)


@dataclass
class RegisterRequest:
    username: str
    email: str
    password: str

    @classmethod
    def from_json(cls, data: Any, password_min_length: int) -> "RegisterRequest":
        cleaned = raise_for_result(
            RegistrationValidator(password_min_length).validate(_require_object(data))
        )
        return cls(
            username=cleaned["username"],
            email=cleaned["email"],
            password=cleaned["password"],
        )


@dataclass
class DomainResponse:
    """DTO for domain API responses."""

    id: Optional[int]
    name: str
    registrar: str
    category: str
    purchase_date: Optional[date]
    expiration_date: Optional[date]
    status: str
    purchase_price: Optional[Decimal]

    @classmethod
    def from_domain(cls, domain: Domain) -> "DomainResponse":
        return cls(
            id=domain.id,
            name=domain.name,
            registrar=domain.registrar,
            category=domain.category,
            purchase_date=domain.purchase_date,
            expiration_date=domain.expiration_date,
            status=domain.status,
            purchase_price=domain.purchase_price,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "registrar": self.registrar,
            "category": self.category,
            "purchaseDate": _iso(self.purchase_date),
            "expirationDate": _iso(self.expiration_date),
            "status": self.status,
            "purchasePrice": _number(self.purchase_price),
        }


@dataclass
class SaleResponse:
    id: Optional[int]
    domain_id: int
    domain_name: Optional[str]
    sale_date: date
    selling_price: Decimal
    buyer: Optional[str]
    registrar: Optional[str]
    category: Optional[str]

    @classmethod
    def from_domain(cls, sale: Sale) -> "SaleResponse":
        return cls(
            id=sale.id,
            domain_id=sale.domain_id,
            domain_name=sale.domain_name,
            sale_date=sale.sale_date,
            selling_price=sale.selling_price,
            buyer=sale.buyer,
            registrar=sale.registrar,
            category=sale.category,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "domainId": self.domain_id,
            "domainName": self.domain_name,
            "saleDate": _iso(self.sale_date),
            "sellingPrice": _number(self.selling_price),
            "buyer": self.buyer,
            "registrar": self.registrar,
            "category": self.category,
        }


@dataclass
class EvaluationResponse:
    id: Optional[int]
    domain_id: int
    tool: str
    evaluation_date: date
    estimated_value: Decimal

    @classmethod
    def from_domain(cls, evaluation: Evaluation) -> "EvaluationResponse":
        return cls(
            id=evaluation.id,
            domain_id=evaluation.domain_id,
            tool=evaluation.tool,
            evaluation_date=evaluation.evaluation_date,
            estimated_value=evaluation.estimated_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "domainId": self.domain_id,
            "tool": self.tool,
            "date": _iso(self.evaluation_date),
            "estimatedValue": _number(self.estimated_value),
        }


@dataclass
class UserResponse:
    """DTO for user API responses."""

    id: int
    username: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, email=user.email)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username, "email": self.email}


@dataclass
class AuthTokenResponse:
    """DTO for authentication token responses."""

    token: str
    user: UserResponse

    def to_dict(self) -> Dict[str, Any]:
        return {"token": self.token, "user": self.user.to_dict()}


def custom_lists_to_dict(custom_lists: CustomLists) -> Dict[str, List[str]]:
    return {
        "registrars": list(custom_lists.registrars),
        "categories": list(custom_lists.categories),
        "evaluationTools": list(custom_lists.evaluation_tools),
    }


def batch_result_to_dict(result: BatchResult) -> Dict[str, Any]:
    return {
        "results": [
            {"id": item.id, "success": item.success, "error": item.error}
            for item in result.results
        ],
        "succeeded": result.succeeded,
        "failed": [{"id": item.id, "error": item.error} for item in result.failed],
    }


def statistics_to_dict(stats: PortfolioStatistics) -> Dict[str, Any]:
    return {
        "totalPurchased": float(stats.total_purchased),
        "totalSold": float(stats.total_sold),
        "profit": float(stats.profit),
        "roi": float(stats.roi),
        "averageValue": float(stats.average_value),
        "domainCount": stats.domain_count,
        "statusCounts": dict(stats.status_counts),
    }


def domain_from_dict(data: Dict[str, Any]) -> Domain:
    """Rebuild a Domain entity from its wire representation."""
    price = data.get("purchasePrice")
    return Domain(
        id=data.get("id"),
        name=data["name"],
        registrar=data.get("registrar") or "",
        category=data.get("category") or "",
        purchase_date=_parse_date(data.get("purchaseDate")),
        expiration_date=_parse_date(data.get("expirationDate")),
        status=data.get("status") or "active",
        purchase_price=Decimal(str(price)) if price is not None else None,
    )


def sale_from_dict(data: Dict[str, Any]) -> Sale:
    return Sale(
        id=data.get("id"),
        domain_id=data["domainId"],
        domain_name=data.get("domainName"),
        sale_date=_parse_date(data.get("saleDate")),
        selling_price=Decimal(str(data.get("sellingPrice") or 0)),
        buyer=data.get("buyer"),
        registrar=data.get("registrar"),
        category=data.get("category"),
    )


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value[:10])
