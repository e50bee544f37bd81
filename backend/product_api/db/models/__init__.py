"""Database models package."""
from product_api.db.models.product import Product

__all__ = ["Product"]
