"""
Domain entities - Pure business logic, no framework dependencies.

Each entity mirrors one stored record; the persistence layer maps
SQLAlchemy rows to these dataclasses and the schema layer maps them
to the camelCase wire format.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional


class DomainStatus:
    """Allowed lifecycle states of a tracked domain."""

    ACTIVE = "active"
    SOLD = "sold"
    EXPIRED = "expired"
    FOR_SALE = "for-sale"

    ALL = (ACTIVE, SOLD, EXPIRED, FOR_SALE)

    # Labels used by the original French UI
    ALIASES: Dict[str, str] = {
        "actif": ACTIVE,
        "vendu": SOLD,
        "expire": EXPIRED,
        "expiré": EXPIRED,
        "en-vente": FOR_SALE,
        "for_sale": FOR_SALE,
        "forsale": FOR_SALE,
    }


def normalize_status(value: Optional[str]) -> Optional[str]:
    """Return the canonical status for ``value`` or None when unknown."""
    if value is None:
        return None
    key = str(value).strip().lower()
    if key in DomainStatus.ALL:
        return key
    return DomainStatus.ALIASES.get(key)


@dataclass
class Domain:
    """A tracked internet domain name asset."""

    name: str = ""
    registrar: str = ""
    category: str = ""
    purchase_date: Optional[date] = None
    expiration_date: Optional[date] = None
    status: str = DomainStatus.ACTIVE
    purchase_price: Optional[Decimal] = None
    id: Optional[int] = None

    def __post_init__(self):
        """Validate business rules."""
        if not self.name or not self.name.strip():
            raise ValueError("Domain name is required")
        if self.status not in DomainStatus.ALL:
            raise ValueError(f"Invalid status: {self.status}")
        if self.purchase_price is not None and self.purchase_price < 0:
            raise ValueError("Purchase price cannot be negative")


@dataclass
class SaleDetails:
    """Sale fields submitted alongside a domain write."""

    sale_date: Optional[date] = None
    selling_price: Optional[Decimal] = None
    buyer: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.sale_date is not None and bool(self.selling_price)


def requires_sale(domain: Domain, sale: Optional[SaleDetails]) -> bool:
    """A Sale row exists iff the domain is sold with a date and a price."""
    return domain.status == DomainStatus.SOLD and sale is not None and sale.is_complete


@dataclass
class Sale:
    """Record of a domain's disposition to a buyer."""

    domain_id: int
    sale_date: date
    selling_price: Decimal
    buyer: Optional[str] = None
    id: Optional[int] = None
    # Joined from the owning domain for listings
    domain_name: Optional[str] = None
    registrar: Optional[str] = None
    category: Optional[str] = None


@dataclass
class Evaluation:
    """A tool-generated value estimate for a domain at a point in time."""

    domain_id: int
    tool: str
    evaluation_date: date
    estimated_value: Decimal
    id: Optional[int] = None

    def __post_init__(self):
        if self.estimated_value < 0:
            raise ValueError("Estimated value cannot be negative")


DEFAULT_REGISTRARS = ["GoDaddy", "Namecheap", "OVH", "Gandi", "Google Domains"]
DEFAULT_CATEGORIES = ["Business", "Tech", "E-commerce", "Blog", "Personal"]
DEFAULT_EVALUATION_TOOLS = ["GoDaddy", "Estibot", "Sedo", "Namebio"]


@dataclass
class CustomLists:
    """User-editable vocabularies used to populate form choices."""

    registrars: List[str] = field(default_factory=lambda: list(DEFAULT_REGISTRARS))
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    evaluation_tools: List[str] = field(
        default_factory=lambda: list(DEFAULT_EVALUATION_TOOLS)
    )


@dataclass
class User:
    """Domain entity representing an account able to log in."""

    username: str = ""
    email: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.username:
            raise ValueError("Username is required")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")


@dataclass
class ItemResult:
    """Outcome of one item inside a batch operation."""

    id: int
    success: bool
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Per-item outcomes of a batch operation; never rolled back as a group."""

    results: List[ItemResult] = field(default_factory=list)

    def add_success(self, item_id: int) -> None:
        self.results.append(ItemResult(id=item_id, success=True))

    def add_failure(self, item_id: int, error: str) -> None:
        self.results.append(ItemResult(id=item_id, success=False, error=error))

    @property
    def succeeded(self) -> List[int]:
        return [r.id for r in self.results if r.success]

    @property
    def failed(self) -> List[ItemResult]:
        return [r for r in self.results if not r.success]
