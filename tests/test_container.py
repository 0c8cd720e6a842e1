"""Tests for container wiring."""

import asyncio

from menu_ranker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.ranking_service.default_limit == settings.default_rank_limit
    assert container.restaurant_service.chunk_size == settings.fetch_chunk_size
    assert container.nutrition_service.max_results == settings.search_max_results
    asyncio.run(container.close_resources())
