"""Free daily AI quota, persisted per calendar day."""

import logging
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from foodkeeper.config import get_settings
from foodkeeper.database import commit_or_log
from foodkeeper.models.ai_usage import AIUsage

logger = logging.getLogger(__name__)


class DailyUsageService:
    """Counts AI requests per local calendar day against ``ai_daily_limit``.

    Each day has its own row, so a new day starts from zero without an explicit reset.
    """

    def __init__(self, db: Session, daily_limit: int | None = None):
        self.db = db
        self.daily_limit = daily_limit if daily_limit is not None else get_settings().ai_daily_limit

    def _today(self) -> AIUsage:
        today = date.today()
        usage = self.db.query(AIUsage).filter(AIUsage.day == today).first()
        if usage is None:
            usage = AIUsage(day=today, used_count=0)
            self.db.add(usage)
        return usage

    @property
    def used_count(self) -> int:
        return self._today().used_count or 0

    @property
    def remaining(self) -> int:
        return max(0, self.daily_limit - self.used_count)

    def can_use(self) -> bool:
        return self.remaining > 0

    def increment(self) -> None:
        """Count one request; a no-op once the quota is used up."""
        if not self.can_use():
            return
        usage = self._today()
        usage.used_count = (usage.used_count or 0) + 1
        if commit_or_log(self.db, "AI usage counter"):
            logger.info(f"AI usage today: {usage.used_count}/{self.daily_limit}")

    def reset(self) -> None:
        self._today().used_count = 0
        commit_or_log(self.db, "AI usage reset")

    @property
    def usage_percentage(self) -> float:
        if self.daily_limit <= 0:
            return 1.0
        return (self.daily_limit - self.remaining) / self.daily_limit

    @staticmethod
    def time_until_reset(now: datetime | None = None) -> str:
        """Hours and minutes until local midnight, as "HH:MM"."""
        now = now or datetime.now()
        midnight = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
        seconds = int((midnight - now).total_seconds())
        return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}"
