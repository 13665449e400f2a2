# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import Settings, settings as default_settings
from .errors import register_error_handlers
from .handlers import (
    DEFAULT_LIMIT, DEFAULT_PAGE,
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, search_products_logic, stats_logic, update_product_logic,
)
from .logging_config import configure_logging
from .middleware import RequestLoggingMiddleware, get_store, require_api_key
from .models import Page, Product, ProductIn, Stats
from .store import DEMO_PRODUCTS, ProductStore

logger = logging.getLogger(__name__)


def _register_routes(app: FastAPI) -> None:
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Products API is running"

    # ---------------------------
    # Product reads
    # search and stats come before /{product_id} so they are not taken for ids
    # ---------------------------
    @app.get("/api/products", response_model=Page)
    async def list_products(category: Optional[str] = None, page: int = DEFAULT_PAGE,
                            limit: int = DEFAULT_LIMIT, store: ProductStore = Depends(get_store)):
        return list_products_logic(store, category, page, limit)

    @app.get("/api/products/search", response_model=List[Product])
    async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
        return search_products_logic(store, q)

    @app.get("/api/products/stats", response_model=Stats)
    async def product_stats(store: ProductStore = Depends(get_store)):
        return stats_logic(store)

    @app.get("/api/products/{product_id}", response_model=Product)
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    # ---------------------------
    # Product writes (x-api-key required)
    # ---------------------------
    @app.post("/api/products", response_model=Product, status_code=201,
              dependencies=[Depends(require_api_key)])
    async def create_product(payload: ProductIn,
                             store: ProductStore = Depends(get_store)):
        return create_product_logic(store, payload.model_dump(exclude_none=True))

    @app.put("/api/products/{product_id}", response_model=Product,
             dependencies=[Depends(require_api_key)])
    async def update_product(product_id: str, payload: ProductIn,
                             store: ProductStore = Depends(get_store)):
        return update_product_logic(store, product_id, payload.model_dump(exclude_none=True))

    @app.delete("/api/products/{product_id}", status_code=204,
                dependencies=[Depends(require_api_key)])
    async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        delete_product_logic(store, product_id)
        return Response(status_code=204)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Build the application around a settings object and a product store.

    Tests pass their own store; the server uses the module-level settings and
    a store seeded with the demo products when seed_demo_data is on.
    """
    settings = settings or default_settings
    if store is None:
        store = ProductStore(DEMO_PRODUCTS if settings.seed_demo_data else None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running on http://%s:%d", settings.host, settings.port)
        if settings.api_key:
            logger.info("API key required for write operations (x-api-key header)")
        else:
            logger.warning("API_KEY is not set: all write operations will be rejected")
        yield

    app = FastAPI(title=settings.project_name, version=settings.version, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)
    _register_routes(app)
    return app


app = create_app()


def run() -> None:
    configure_logging(default_settings.log_level)
    uvicorn.run("app.main:app", host=default_settings.host, port=default_settings.port, log_config=None)


if __name__ == "__main__":
    run()
