"""Search service layer for PartSearch.

Exposes the search service and a factory wiring it from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PartSearch.services.search import (
    PartSearchService,
    PreparedSearch,
    QueryExecutor,
    SearchResult,
    sane_column_key,
)

if TYPE_CHECKING:
    from PartSearch.config import AppConfig


def create_search_service(
    config: AppConfig,
    executor: QueryExecutor | None = None,
) -> PartSearchService:
    """Create a search service from application configuration.

    Args:
        config: Application configuration containing search and SQL settings.
        executor: Optional collaborator that runs compiled statements.

    Returns:
        Configured PartSearchService instance.
    """
    return PartSearchService(
        executor=executor,
        max_terms=config.search.max_terms,
        relaxation=config.search.relaxation,
        paramstyle=config.sql.paramstyle,
    )


__all__ = [
    "PartSearchService",
    "PreparedSearch",
    "QueryExecutor",
    "SearchResult",
    "create_search_service",
    "sane_column_key",
]
