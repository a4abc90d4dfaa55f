"""
Settings Router
Reads and updates the user's dashboard settings, including the monthly budget
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from expense_dashboard.core.dependencies import get_store, load_user_settings
from expense_dashboard.db.store import ExpenseStore
from expense_dashboard.models.settings import UserSettings, UserSettingsUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=UserSettings)
def get_settings(current: Dict[str, Any] = Depends(load_user_settings)):
    """
    Current settings. Defaults (budget 2000 USD, system theme) are returned
    until the user saves something.
    """
    return current


@router.put("/", response_model=UserSettings)
def update_settings(
    update: UserSettingsUpdate,
    current: Dict[str, Any] = Depends(load_user_settings),
    store: ExpenseStore = Depends(get_store),
):
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    merged = UserSettings(**{**current, **changes})
    store.save_settings(merged.model_dump())
    if "budget" in changes:
        logger.info(f"Monthly budget set to {merged.budget:.2f}")
    return merged
