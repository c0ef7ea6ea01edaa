"""
PATH: sales/models/__init__.py

Sales models export surface.
"""

from .customer import Customer
from .sale import Sale
from .sale_item import SaleItem

__all__ = [
    "Customer",
    "Sale",
    "SaleItem",
]
