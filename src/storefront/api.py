"""FastAPI application factory for the storefront HTTP API.

The domain must be initialized before the app serves requests; ``app.py``
does that at import time for uvicorn.
"""

from fastapi import FastAPI, Request
from protean.integrations.fastapi import register_exception_handlers

from storefront.admin.api import admin_router
from storefront.catalogue.api import product_router
from storefront.domain import storefront
from storefront.identity.api import router as auth_router
from storefront.identity.api.dependencies import register_authentication_handler
from storefront.ordering.api import cart_router, order_router
from storefront.payments.api import payment_router
from storefront.utils.logging import add_context, clear_context


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Online shop: accounts, catalogue, cart, orders, payments and back office",
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each API request."""
        if not request.url.path.startswith("/api"):
            return await call_next(request)

        add_context(method=request.method, path=request.url.path)
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    register_authentication_handler(app)

    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(payment_router)
    app.include_router(admin_router)

    return app
