"""Column helpers shared by the inventory and household models."""

from sqlalchemy import Column, DateTime, func


class TimestampMixin:
    """created_at / updated_at, filled in by the database."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


def enum_values(enum_class) -> list[str]:
    """Persist enum values ("Dairy") rather than member names ("DAIRY")."""
    return [member.value for member in enum_class]
