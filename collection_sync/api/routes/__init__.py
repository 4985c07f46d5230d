"""
API Routes
==========

Route modules for the collection sync service.
"""

from collection_sync.api.routes.health import router as health_router
from collection_sync.api.routes.process import router as process_router
from collection_sync.api.routes.webhooks import router as webhooks_router

__all__ = ["health_router", "process_router", "webhooks_router"]
