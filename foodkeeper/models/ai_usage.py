"""Daily AI usage counter model."""

from sqlalchemy import Column, Date, Integer

from foodkeeper.database import Base
from foodkeeper.models.mixins import TimestampMixin


class AIUsage(Base, TimestampMixin):
    """How many free AI requests were used on a calendar day."""

    __tablename__ = "ai_usage"

    id = Column(Integer, primary_key=True, index=True)
    day = Column(Date, nullable=False, unique=True, index=True)
    used_count = Column(Integer, nullable=False, default=0)
