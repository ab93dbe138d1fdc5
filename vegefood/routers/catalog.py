"""
Catalog Router

Read-only product and category endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException

from vegefood.catalog import CatalogProvider
from vegefood.errors import ERROR_PRODUCT_NOT_FOUND
from .deps import get_catalog

router = APIRouter(tags=["catalog"])


@router.get("/products")
async def list_products(catalog: CatalogProvider = Depends(get_catalog)):
    products = await catalog.get_products()
    return [p.to_dict() for p in products]


@router.get("/products/{product_id}")
async def get_product(product_id: int, catalog: CatalogProvider = Depends(get_catalog)):
    product = await catalog.get_product_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return product.to_dict()


@router.get("/categories")
async def list_categories(catalog: CatalogProvider = Depends(get_catalog)):
    categories = await catalog.get_categories()
    return [c.model_dump(by_alias=True) for c in categories]


@router.get("/categories/{category}/products")
async def list_category_products(category: str, catalog: CatalogProvider = Depends(get_catalog)):
    products = await catalog.get_products_by_category(category)
    return [p.to_dict() for p in products]
