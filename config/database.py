"""Helpers for building the data store connection URL from its parts."""
from urllib.parse import quote_plus


def get_database_url(
    driver: str,
    host: str,
    port: int,
    user: str,
    password: str,
    name: str,
) -> str:
    """
    Join connection parts into a SQLAlchemy URL. The user and password are
    percent-encoded so characters like '@' or '/' survive.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "tracker", "p@ss", "repairs")
        'postgresql+asyncpg://tracker:p%40ss@db:5432/repairs'
    """
    credentials = quote_plus(user)
    if password:
        credentials += ":" + quote_plus(password)
    return f"{driver}://{credentials}@{host}:{port}/{name}"
