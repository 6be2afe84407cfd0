"""
Card Store Factory
Centralizes the logic for selecting the configured CardStore implementation.
"""

import logging

from recall.application.config import AppConfig
from recall.domain.ports import CardStore
from recall.infrastructure.stores.memory import InMemoryCardStore
from recall.infrastructure.stores.sqlite import SqliteCardStore

logger = logging.getLogger(__name__)


def get_card_store(config: AppConfig) -> CardStore:
    """
    Returns the CardStore implementation named by config.backend.
    """
    if config.backend == "memory":
        logger.info("Backend: memory")
        return InMemoryCardStore()

    logger.info(f"Backend: sqlite ({config.db_path})")
    return SqliteCardStore(config.db_path)
