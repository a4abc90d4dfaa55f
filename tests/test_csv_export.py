from datetime import date

from expense_dashboard.utils.csv_export import export_filename, generate_csv


def test_generate_csv():
    expenses = [
        {"date": "2025-11-01", "title": "Groceries", "category": "food", "amount": 42.5},
        {"date": date(2025, 11, 2), "title": "Taxi, late night", "category": "transportation", "amount": 18},
    ]
    assert generate_csv(expenses).splitlines() == [
        "Date,Title,Category,Amount",
        "2025-11-01,Groceries,food,42.50",
        '2025-11-02,"Taxi, late night",transportation,18.00',
    ]


def test_generate_csv_empty():
    assert generate_csv([]) == "Date,Title,Category,Amount\n"


def test_export_filename():
    assert export_filename(date(2025, 11, 15)) == "expenses-2025-11-15.csv"
