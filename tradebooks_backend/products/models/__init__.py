"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .category import Category
from .product import Product
from .stock import Stock
from .stock_movement import StockMovement
from .warehouse import Warehouse

__all__ = [
    "Category",
    "Product",
    "Warehouse",
    "Stock",
    "StockMovement",
]
