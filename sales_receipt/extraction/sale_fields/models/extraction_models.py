"""
Extraction Models - Immutable value objects for sale extraction results
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple, Iterable


class ProductCategory(str, Enum):
    """Fixed product taxonomy used by the store."""
    ACTIVATION = 'activation'
    UPGRADE = 'upgrade'
    SERVICE = 'service'
    PROTECTION = 'protection'
    ACCESSORY = 'accessory'


@dataclass(frozen=True)
class ExtractionResult:
    """A single field value recovered from a text scope."""
    value: str
    raw_text: str
    scope: str
    extraction_method: str
    pattern_used: Optional[str] = None


@dataclass(frozen=True)
class DateExtractionResult(ExtractionResult):
    """Date match with the validated calendar date attached."""
    parsed_date: Optional[datetime] = None


@dataclass(frozen=True)
class LineItem:
    """One parsed product entry. Price is the unit price, not the line total."""
    name: str
    quantity: int = 1
    price: float = 0.0
    category: ProductCategory = ProductCategory.ACCESSORY

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"LineItem quantity must be >= 1, got {self.quantity}")
        if self.price < 0:
            raise ValueError(f"LineItem price must be >= 0, got {self.price}")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'quantity': self.quantity,
            'price': self.price,
            'category': self.category.value
        }


@dataclass(frozen=True)
class Section:
    """
    A contiguous block of document lines opened by a header line.

    ``end_line`` is inclusive; ``line_range`` gives the half-open equivalent.
    """
    key: str
    start_line: int
    end_line: int
    content: Tuple[str, ...] = ()

    @property
    def line_range(self) -> range:
        return range(self.start_line, self.end_line + 1)

    @property
    def text(self) -> str:
        return '\n'.join(self.content)


@dataclass(frozen=True)
class DocumentSections:
    """Ordered section partition of one normalized document."""
    lines: Tuple[str, ...]
    sections: Tuple[Section, ...]

    def keys(self) -> List[str]:
        return [section.key for section in self.sections]

    def get(self, key: str) -> Optional[Section]:
        for section in self.sections:
            if section.key == key:
                return section
        return None

    def matching(self, keywords: Iterable[str]) -> List[Section]:
        """Sections whose key contains any of the keywords, in document order."""
        keywords = tuple(keywords)
        return [s for s in self.sections if any(k in s.key for k in keywords)]

    def first_matching(self, keywords: Iterable[str]) -> Optional[Section]:
        found = self.matching(keywords)
        return found[0] if found else None

    def scopes_for(self, keywords: Iterable[str]) -> List[Tuple[str, str]]:
        """(name, text) scopes for a field: matching sections first, whole document last."""
        scopes = [(section.key, section.text) for section in self.matching(keywords)]
        scopes.append(('document', self.document_text))
        return scopes

    def section_scopes(self) -> List[Tuple[str, str]]:
        """Every section as a scope, in document order."""
        return [(section.key, section.text) for section in self.sections]

    @property
    def document_text(self) -> str:
        return '\n'.join(self.lines)

    @property
    def has_headers(self) -> bool:
        return any(s.key != 'header' for s in self.sections)


@dataclass(frozen=True)
class ExtractedSale:
    """Structured sale record recovered from receipt/invoice text."""
    customer_name: str = ''
    phone_number: str = ''
    products: Tuple[LineItem, ...] = ()
    total_amount: float = 0.0
    date: datetime = field(default_factory=datetime.now)
    store_location: str = ''
    order_number: str = ''
    date_detected: bool = False
    extraction_method: str = 'empty_default'

    def __post_init__(self):
        if self.total_amount < 0:
            raise ValueError(f"total_amount must be >= 0, got {self.total_amount}")

    def has_useful_data(self) -> bool:
        """True when a strategy recovered a customer, any product, or a positive total."""
        return bool(self.customer_name or self.products or self.total_amount > 0)

    def with_changes(self, **changes) -> 'ExtractedSale':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'customerName': self.customer_name,
            'phoneNumber': self.phone_number,
            'products': [item.to_dict() for item in self.products],
            'totalAmount': self.total_amount,
            'date': self.date.isoformat(),
            'storeLocation': self.store_location,
            'orderNumber': self.order_number
        }


def empty_sale() -> ExtractedSale:
    """The zero-value sale returned by every failure path."""
    return ExtractedSale()
