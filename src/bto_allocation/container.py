"""
Application Container
Wires settings, logging, persistence and services into one explicit object
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from loguru import logger
from sqlalchemy.engine import Engine

from bto_allocation.core.config import Settings, settings as default_settings
from bto_allocation.core.database import build_engine, build_session_factory, init_db
from bto_allocation.core.logging_config import configure_logging
from bto_allocation.application.repositories import Catalog
from bto_allocation.application.services import AllocationEngine
from bto_allocation.application.services.auth import AuthService
from bto_allocation.infrastructure.persistence.catalog_store import SqlCatalogStore
from bto_allocation.infrastructure.security import BcryptPasswordHasher


@dataclass
class Container:
    """Everything a front end needs; built once per process"""

    config: Settings
    db_engine: Engine
    store: SqlCatalogStore
    catalog: Catalog
    engine: AllocationEngine
    auth: AuthService

    def save(self) -> None:
        """Write the current catalog to the database"""
        self.store.save(self.catalog)

    def close(self) -> None:
        self.db_engine.dispose()
        logger.info("Database engine disposed")


def build_container(
    config: Optional[Settings] = None,
    clock: Callable[[], date] = date.today,
    setup_logging: bool = True
) -> Container:
    """
    Build the application graph

    Creates tables if needed, loads the catalog and connects the
    allocation engine's flush hook to the catalog store.
    """
    config = config or default_settings
    if setup_logging:
        configure_logging(config)

    db_engine = build_engine(config.DATABASE_URL, config.DB_ECHO)
    init_db(db_engine)

    store = SqlCatalogStore(build_session_factory(db_engine), enquiry_id_length=config.ENQUIRY_ID_LENGTH)
    catalog = store.load()

    engine = AllocationEngine.from_catalog(
        catalog,
        config=config,
        clock=clock,
        flush_hook=store.save if config.FLUSH_AFTER_COMMAND else None,
    )
    auth = AuthService(catalog.users, BcryptPasswordHasher(config.BCRYPT_ROUNDS))

    logger.info(f"{config.APP_NAME} ready ({config.ENVIRONMENT}, {config.DATABASE_URL})")
    return Container(
        config=config,
        db_engine=db_engine,
        store=store,
        catalog=catalog,
        engine=engine,
        auth=auth,
    )
