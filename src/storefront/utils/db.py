from protean.domain import Domain
from sqlalchemy import create_engine

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider, create_engine(provider.conn_info["database_uri"])


def _register_tables(domain: Domain, provider_name: str) -> None:
    """Touch each repository's DAO so its table is added to SQLAlchemy's metadata."""
    registry = domain.registry
    records = [*registry.aggregates.values(), *registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every aggregate and entity on SQL providers."""
    with domain.domain_context():
        for name, provider, engine in _sql_providers(domain):
            _register_tables(domain, name)
            provider._metadata.create_all(engine)
            logger.info("schema_created", provider=name)


def drop_db(domain: Domain):
    """Drop every table created by ``setup_db``."""
    with domain.domain_context():
        for name, provider, engine in _sql_providers(domain):
            provider._metadata.drop_all(engine)
            logger.info("schema_dropped", provider=name)


def database_status(domain: Domain) -> str:
    """Probe the default provider with a trivial read.

    Returns ``"connected"`` when the probe succeeds and ``"disconnected"``
    otherwise. Must be called inside an active domain context.
    """
    from storefront.identity.user.user import User

    try:
        domain.repository_for(User)._dao.query.limit(1).all()
    except Exception:
        logger.warning("database_probe_failed", exc_info=True)
        return "disconnected"
    return "connected"
