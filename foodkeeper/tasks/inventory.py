"""Celery tasks for the daily inventory sweep."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodkeeper.celery_app import app as celery_app
from foodkeeper.config import get_settings
from foodkeeper.database import SessionLocal
from foodkeeper.services.history_service import HistoryService
from foodkeeper.services.inventory_service import InventoryService
from foodkeeper.services.shopping_service import ShoppingService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=2)
def sweep_inventory(self, discard_expired: bool = True) -> dict:
    """Record and remove expired items, prune old history and report restock shortages.

    Args:
        discard_expired: Remove expired items after recording them; otherwise only count them

    Returns:
        dict with sweep results
    """
    db: Session = SessionLocal()
    try:
        history = HistoryService(db)
        inventory = InventoryService(db, history)

        if discard_expired:
            expired = inventory.discard_expired()
        else:
            expired = [item.name for item in inventory.expired_items()]
        expiring = [item.name for item in inventory.expiring_items()]
        pruned = history.perform_auto_cleanup(get_settings().history_retention_days)

        shortages = ShoppingService(db).shortages()
        for shortage in shortages:
            logger.info(
                f"Restock needed: {shortage.item.name} "
                f"({shortage.current_stock}/{shortage.item.min_quantity} {shortage.item.unit})"
            )

        logger.info(
            f"Inventory sweep complete: {len(expired)} expired, {len(expiring)} expiring soon, "
            f"{pruned} history records pruned, {len(shortages)} shortages"
        )
        return {
            "success": True,
            "expired": expired,
            "expiring": expiring,
            "history_pruned": pruned,
            "shortages": [shortage.item.name for shortage in shortages],
        }
    except SQLAlchemyError as e:
        logger.error(f"Error sweeping inventory: {e}")
        db.rollback()
        raise self.retry(exc=e, countdown=60) from e
    finally:
        db.close()
