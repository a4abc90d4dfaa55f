import logging
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from analytics_engine import filter_by_date_range
from expense_dashboard.core.dependencies import DateRange, get_store
from expense_dashboard.db.store import ExpenseStore
from expense_dashboard.utils import csv_export

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/export.csv")
def export_expenses_csv(
    date_range: DateRange = Depends(),
    store: ExpenseStore = Depends(get_store),
) -> Response:
    """
    Download expenses as CSV (Date, Title, Category, Amount), oldest first.
    """
    expenses = filter_by_date_range(store.list_expenses(), date_range.start, date_range.end)
    expenses = sorted(expenses, key=lambda e: e["date"])
    filename = csv_export.export_filename(date.today())
    logger.info(f"Exporting {len(expenses)} expenses to {filename}")
    return Response(
        content=csv_export.generate_csv(expenses),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
