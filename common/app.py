"""FastAPI application factory shared by the site's services."""

from typing import Any

import fastapi

import common.log

# ---------------------------------------------------------------------------
# Health router
# ---------------------------------------------------------------------------

health_router = fastapi.APIRouter()


@health_router.api_route('/health', methods=['GET', 'HEAD'])
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {'status': 'healthy'}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(title: str, **kwargs: Any) -> fastapi.FastAPI:
    """Create a FastAPI app with health endpoint and logging configured.

    Additional keyword arguments are forwarded to FastAPI.__init__ (e.g. docs_url).
    """
    app = fastapi.FastAPI(title=title, **kwargs)
    common.log.configure_logging()
    app.include_router(health_router)
    return app
