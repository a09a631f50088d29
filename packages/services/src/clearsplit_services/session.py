"""Application entry point: configuration to a ready DocumentStore."""

from datetime import date
from typing import Optional

import structlog

from clearsplit_core.editing import Updater, build_deadlines
from clearsplit_core.ids import IdGenerator
from clearsplit_core.store import DocumentStore

from .config import ClearsplitConfig
from .logging_setup import configure_logging
from .storage import build_storage

logger = structlog.get_logger()


def open_store(
    config: Optional[ClearsplitConfig] = None,
    id_gen: Optional[IdGenerator] = None,
    setup_logging: bool = True,
) -> DocumentStore:
    """Configure logging, open the configured backend and load the document.

    Args:
        config: Settings; read from the environment when omitted.
        id_gen: Id generator for rows that need ids during the load.
        setup_logging: Whether to call ``configure_logging`` first.
    """
    config = config or ClearsplitConfig()
    if setup_logging:
        configure_logging(config.log_level, json_output=config.log_json)

    storage = build_storage(config.storage)
    store = DocumentStore.from_storage(
        storage,
        id_gen=id_gen,
        jurisdiction=config.default_jurisdiction,
        history_limit=config.history_limit,
    )
    logger.info(
        "session_opened",
        env=config.env,
        backend=config.storage.backend.value,
        history_limit=config.history_limit,
        deadline_rules=config.deadline_rules.model_dump(),
    )
    return store


def configured_deadlines(
    id_gen: IdGenerator,
    config: Optional[ClearsplitConfig] = None,
    today: Optional[date] = None,
) -> Updater:
    """Updater regenerating case deadlines from the configured offsets.

    ``config.deadline_rules`` (``CLEARSPLIT_DEADLINE_RULES``) replaces the
    built-in offsets; the case's own ``deadlineRules`` still override it.
    """
    config = config or ClearsplitConfig()
    logger.debug("deadline_offsets_configured", **config.deadline_rules.model_dump())
    return build_deadlines(id_gen, today=today, defaults=config.deadline_rules)


__all__ = ["open_store", "configured_deadlines"]
