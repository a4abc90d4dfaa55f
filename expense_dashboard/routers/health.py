"""
Health Check Router
Reports API status and whether the local store can be read
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from expense_dashboard.core.config import settings
from expense_dashboard.core.dependencies import get_store
from expense_dashboard.db.store import ExpenseStore, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check(store: ExpenseStore = Depends(get_store)):
    """
    Health check endpoint. Reads the store once; an unreadable or corrupt
    store reports ``degraded`` instead of failing the request.
    """
    store_status = {
        "path": str(settings.STORE_PATH),
        "reachable": False,
        "expense_count": None,
        "error": None,
    }
    try:
        store_status["expense_count"] = len(store.list_expenses())
        store.get_settings()
        store_status["reachable"] = True
    except StorageError as e:
        store_status["error"] = str(e)
        logger.error(f"Store check failed: {e}")

    return {
        "status": "healthy" if store_status["reachable"] else "degraded",
        "service": settings.PROJECT_NAME,
        "store": store_status,
        "timestamp": datetime.utcnow().isoformat(),
    }
