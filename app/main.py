# app/main.py
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import PlainTextResponse

from .config import Settings, get_settings
from .errors import register_error_handlers
from .logging_config import setup_logging
from .models import Product, ProductIn
from .pipeline import (
    get_store, parse_positive_int, register_request_logger,
    require_api_key, validate_product,
)
from .store import ProductStore

router = APIRouter(prefix="/api/products")

# ---------------------------
# Product reads
# ---------------------------
@router.get("")
async def list_products(category: Optional[str] = None, page: Optional[str] = None,
                        limit: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return store.list_products(category, parse_positive_int(page), parse_positive_int(limit))

# search and stats must be registered before /{product_id}
@router.get("/search")
async def search_products(name: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return store.search(name)

@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return store.stats()

@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return store.get(product_id)

# ---------------------------
# Product writes (auth + validation)
# ---------------------------
@router.post("", status_code=201, response_model=Product, dependencies=[Depends(require_api_key)])
async def create_product(payload: ProductIn = Depends(validate_product),
                         store: ProductStore = Depends(get_store)):
    return store.create(payload)

@router.put("/{product_id}", response_model=Product, dependencies=[Depends(require_api_key)])
async def replace_product(product_id: str, payload: ProductIn = Depends(validate_product),
                          store: ProductStore = Depends(get_store)):
    return store.replace(product_id, payload)

@router.delete("/{product_id}", dependencies=[Depends(require_api_key)])
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    deleted = store.delete(product_id)
    return {"message": "Product deleted", "product": deleted}


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    if store is None:
        store = ProductStore.with_samples() if settings.seed_sample_data else ProductStore()

    app = FastAPI(title=settings.app_title)
    app.state.settings = settings
    app.state.store = store

    register_request_logger(app)
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Welcome to the Product API! Go to /api/products to see all products."

    app.include_router(router)
    return app


app = create_app()


def serve() -> None:
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
