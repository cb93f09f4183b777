"""Database, token, and service wiring for the Flask app."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelBillRepository, SQLModelCategoryRepository
from .services.bills import BillLedger
from .services.categories import CategoryRegistry
from .services.tokens import TokenService

EXTENSION_KEY = "finmind"


@dataclass(frozen=True)
class FinmindState:
    """Process-wide collaborators shared by every request."""

    engine: Engine
    session_factory: SessionFactory
    tokens: TokenService


def init_app(app: Flask, config: BaseConfig) -> FinmindState:
    """Create the engine and schema, then attach shared state to ``app``."""

    engine = create_db_engine(config)
    init_database(engine)
    state = FinmindState(
        engine=engine,
        session_factory=create_session_factory(engine),
        tokens=TokenService(config.JWT_SECRET, ttl=timedelta(hours=config.TOKEN_TTL_HOURS)),
    )
    app.extensions[EXTENSION_KEY] = state

    if config.SEED_DEFAULTS:
        build_category_registry(state).seed_defaults()
    return state


def get_state() -> FinmindState:
    """Return the state attached to the current app."""

    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("FinMind extensions not initialized")
    return state


def build_category_registry(state: FinmindState) -> CategoryRegistry:
    return CategoryRegistry(SQLModelCategoryRepository(state.session_factory))


def build_bill_ledger(state: FinmindState) -> BillLedger:
    return BillLedger(
        SQLModelBillRepository(state.session_factory),
        SQLModelCategoryRepository(state.session_factory),
    )


def category_registry() -> CategoryRegistry:
    return build_category_registry(get_state())


def bill_ledger() -> BillLedger:
    return build_bill_ledger(get_state())
