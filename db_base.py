from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Index and constraint names match the ones the migrations create
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for the tracker's tables; no engine imports here."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
