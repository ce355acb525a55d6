"""Storefront FastAPI application.

Commands are processed synchronously within each HTTP request, inside the
storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# Initialized at module level so uvicorn workers share the domain.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - default      → in-memory database, sync event processing
#   - "production" → PostgreSQL, async event processing via the Engine
from storefront.api import create_app
from storefront.domain import storefront

storefront.init()

app = create_app()
