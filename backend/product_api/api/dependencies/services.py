"""Dependencies wiring the shared database into the product service."""

from fastapi import Depends, Request

from product_api.db.session import Database
from product_api.services.product_service import ProductService
from product_api.storage.product_gateway import SqlProductGateway


def get_database(request: Request) -> Database:
    """Return the process-wide database handle opened at startup."""
    return request.app.state.database


def get_product_service(database: Database = Depends(get_database)) -> ProductService:
    """FastAPI dependency that builds the product service over the database."""
    return ProductService(SqlProductGateway(database))
