"""Catalog package: static product and category data."""
from .models import Product, Category
from .service import CatalogProvider

__all__ = [
    "Product",
    "Category",
    "CatalogProvider",
]
