"""Schema management for the SQL providers configured on the domain."""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def _register_tables(domain: Domain, provider) -> None:
    # Touching a repository's DAO registers its table in the provider metadata
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    outbox_repos = getattr(domain, "_outbox_repos", {})
    if provider.name in outbox_repos:
        outbox_repos[provider.name]._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create the tables backing Products, Carts, Users, Sessions, Tickets and Messages."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            _register_tables(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Schema created", provider=provider.name)


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Schema dropped", provider=provider.name)
