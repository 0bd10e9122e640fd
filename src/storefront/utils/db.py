from protean.domain import Domain
from protean.exceptions import ConfigurationError
from sqlalchemy import create_engine

from storefront.config import StorefrontSettings

_PROVIDERS_BY_SCHEME = {
    "postgresql": "postgresql",
    "postgres": "postgresql",
    "sqlite": "sqlite",
}


def configure_persistence(domain: Domain, settings: StorefrontSettings) -> None:
    """Point the default database at ``settings.database_url``.

    Must run before ``domain.init()``. Without a database URL the domain keeps
    its in-memory default.
    """
    if not settings.database_url:
        return

    scheme = settings.database_url.split(":", 1)[0].split("+", 1)[0]
    provider = _PROVIDERS_BY_SCHEME.get(scheme)
    if provider is None:
        raise ConfigurationError(f"Unsupported database URL scheme: {scheme}")

    domain.config["databases"]["default"] = {
        "provider": provider,
        "database_uri": settings.database_url,
    }


def setup_db(domain: Domain):
    """Setup database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])

                # Accessing _dao registers each model with SQLAlchemy
                for _, aggregate_record in domain.registry.aggregates.items():
                    if aggregate_record.cls.meta_.provider == provider.name:
                        domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

                for _, entity_record in domain.registry.entities.items():
                    if entity_record.cls.meta_.provider == provider.name:
                        domain.repository_for(entity_record.cls)._dao  # noqa: B018

                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
