import csv
import io
from datetime import date
from typing import Any, Dict, Iterable

CSV_FIELDS = ["Date", "Title", "Category", "Amount"]


def export_filename(today: date) -> str:
    return f"expenses-{today.isoformat()}.csv"


def generate_csv(expenses: Iterable[Dict[str, Any]]) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for e in expenses:
        writer.writerow({
            "Date": str(e["date"]),
            "Title": e["title"],
            "Category": e["category"],
            "Amount": f"{float(e['amount']):.2f}",
        })
    return output.getvalue()
