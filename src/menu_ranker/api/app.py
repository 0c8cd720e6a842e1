"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from menu_ranker.adapters.supabase_restaurant_repository import serialize_item
from menu_ranker.api.models import RankRequest, RefreshRequest
from menu_ranker.app_logging import configure_logging
from menu_ranker.containers import AppContainer
from menu_ranker.domain.menu import RestaurantRecord
from menu_ranker.domain.ranking import RankedRestaurant


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/config")
    async def client_config(request: Request) -> dict[str, str | None]:
        """Return the public map key used by the front end."""
        state_container: AppContainer = request.app.state.container
        return {"apiKey": state_container.settings.google_maps_key}

    @app.post("/rank", response_model=None)
    async def rank(
        payload: RankRequest, request: Request
    ) -> list[dict[str, object]] | JSONResponse:
        """Refresh stale restaurants and return them ranked by health score."""
        state_container: AppContainer = request.app.state.container
        try:
            ranked = await state_container.ranking_service.refresh_and_rank(
                payload.names, payload.limit
            )
        except Exception as exc:
            logger.exception("Ranking failed", extra={"names": payload.names})
            return _error_response(state_container, exc, "Internal Server Error")
        return [_serialize_ranked(restaurant) for restaurant in ranked]

    @app.post("/refresh-one")
    async def refresh_one(payload: RefreshRequest, request: Request) -> dict[str, bool]:
        """Refresh a single restaurant; failures are reported, never raised.

        ``success`` is false only when the refresh raised. A name the catalog
        does not know still succeeds and leaves the store unchanged.
        """
        state_container: AppContainer = request.app.state.container
        try:
            await state_container.restaurant_service.refresh(payload.name)
        except Exception:
            logger.exception("Refresh failed", extra={"restaurant": payload.name})
            return {"success": False}
        return {"success": True}

    @app.get("/browse", response_model=None)
    async def browse(
        request: Request, search: str | None = None
    ) -> list[dict[str, object]] | JSONResponse:
        """Return stored restaurants whose name contains the search text."""
        state_container: AppContainer = request.app.state.container
        try:
            records = state_container.restaurant_service.browse(search)
        except Exception as exc:
            logger.exception("Browse failed", extra={"search": search})
            return _error_response(state_container, exc, "Internal Server Error")
        return [_serialize_record(record) for record in records]

    @app.delete("/cleanup", response_model=None)
    async def cleanup(request: Request) -> dict[str, object] | JSONResponse:
        """Remove unnamed menu items and empty restaurants."""
        state_container: AppContainer = request.app.state.container
        try:
            result = state_container.maintenance_service.sweep()
        except Exception as exc:
            logger.exception("Cleanup failed")
            return _error_response(state_container, exc, "Cleanup failed")
        return {
            "success": True,
            "itemsRemoved": result.items_removed,
            "restaurantsRemoved": result.restaurants_removed,
        }

    return app


def _error_response(
    state_container: AppContainer, exc: Exception, fallback: str
) -> JSONResponse:
    """Return a 500 response with local debug info."""
    message = fallback
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            message = f"{fallback} (debug: {detail})"
    return JSONResponse(status_code=500, content={"error": message})


def _serialize_ranked(restaurant: RankedRestaurant) -> dict[str, object]:
    return {
        "name": restaurant.name,
        "menu": [
            {
                "item": entry.item.name,
                "cal": entry.item.calories,
                "prot": entry.item.protein_g,
                "score": entry.score,
            }
            for entry in restaurant.menu
        ],
        "bestScore": restaurant.best_score,
    }


def _serialize_record(record: RestaurantRecord) -> dict[str, object]:
    return {
        "name": record.name,
        "lastUpdated": record.last_updated.isoformat() if record.last_updated else None,
        "servings": [serialize_item(item) for item in record.menu],
    }
