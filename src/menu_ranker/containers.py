"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from menu_ranker.adapters.fatsecret_auth import HttpxCredentialProvider
from menu_ranker.adapters.fatsecret_client import HttpxFatSecretClient
from menu_ranker.adapters.supabase_restaurant_repository import (
    SupabaseRestaurantRepository,
)
from menu_ranker.config import Settings
from menu_ranker.services.maintenance import MaintenanceService
from menu_ranker.services.nutrition import NutritionService
from menu_ranker.services.ranking import RankingService
from menu_ranker.services.resolution import RestaurantResolver
from menu_ranker.services.restaurants import RestaurantService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    restaurant_service: RestaurantService
    ranking_service: RankingService
    maintenance_service: MaintenanceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    repository = SupabaseRestaurantRepository(supabase_client)
    credential_provider = HttpxCredentialProvider.create(
        client_id=resolved_settings.fatsecret_client_id,
        client_secret=resolved_settings.fatsecret_client_secret,
        token_url=resolved_settings.fatsecret_token_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    fatsecret_client = HttpxFatSecretClient.create(
        base_url=resolved_settings.fatsecret_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    nutrition_service = NutritionService(
        client=fatsecret_client,
        credentials=credential_provider,
        max_results=resolved_settings.search_max_results,
    )
    restaurant_service = RestaurantService(
        repository=repository,
        resolver=RestaurantResolver(nutrition_service),
        chunk_size=resolved_settings.fetch_chunk_size,
        freshness_seconds=resolved_settings.freshness_seconds,
        browse_limit=resolved_settings.browse_limit,
    )
    ranking_service = RankingService(
        repository=repository,
        restaurant_service=restaurant_service,
        default_limit=resolved_settings.default_rank_limit,
    )
    maintenance_service = MaintenanceService(repository)

    async def close_resources() -> None:
        await credential_provider.close()
        await fatsecret_client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        restaurant_service=restaurant_service,
        ranking_service=ranking_service,
        maintenance_service=maintenance_service,
        close_resources=close_resources,
    )
