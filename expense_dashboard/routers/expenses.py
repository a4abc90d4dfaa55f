import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from analytics_engine import filter_by_date_range
from expense_dashboard.core.dependencies import DateRange, get_store
from expense_dashboard.db.store import ExpenseStore
from expense_dashboard.models.expense import ExpenseCreate, ExpenseInDB, ExpensePublic, ExpenseUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[ExpensePublic])
def list_expenses(
    date_range: DateRange = Depends(),
    store: ExpenseStore = Depends(get_store),
):
    """
    All expenses, newest first. ``start``/``end`` (YYYY-MM-DD) narrow the
    list to an inclusive date range.
    """
    expenses = filter_by_date_range(store.list_expenses(), date_range.start, date_range.end)
    return sorted(
        expenses,
        key=lambda e: (e["date"], e.get("created_at") or ""),
        reverse=True,
    )


@router.post("/", response_model=ExpensePublic, status_code=status.HTTP_201_CREATED)
def create_expense(expense: ExpenseCreate, store: ExpenseStore = Depends(get_store)):
    expense_db = ExpenseInDB(**expense.model_dump())
    store.put_expense(expense_db.model_dump(mode="json"))
    return ExpensePublic(**expense_db.model_dump())


@router.get("/{expense_id}", response_model=ExpensePublic)
def get_expense(expense_id: str, store: ExpenseStore = Depends(get_store)):
    expense = store.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.put("/{expense_id}", response_model=ExpensePublic)
def update_expense(
    expense_id: str,
    expense_update: ExpenseUpdate,
    store: ExpenseStore = Depends(get_store),
):
    mutable_fields = expense_update.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    if not mutable_fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    updated = store.update_expense(expense_id, mutable_fields)
    if not updated:
        raise HTTPException(status_code=404, detail="Expense not found")

    return updated


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: str, store: ExpenseStore = Depends(get_store)):
    deleted = store.delete_expense(expense_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Expense not found")
    return None
