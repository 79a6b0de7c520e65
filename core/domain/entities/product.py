"""Read-only catalog entry as seen by the ordering context."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class CatalogProduct:
    """Product snapshot returned by the catalog lookup."""
    id: str
    title: str
    sizes: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    fulfillment_partner: Optional[str] = None
