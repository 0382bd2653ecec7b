"""Example: compute a travel allowance straight from the service layer (no Flask).

Controllers stay thin; the calculation lives in the allowance calculator.
"""

from datetime import datetime
from decimal import Decimal

from src.timesheet_system.timesheet_system.allowances.calculator.standard_calculator import compute_allowance


def main():
    result = compute_allowance(
        datetime(2025, 1, 15, 14, 0),
        datetime(2025, 1, 18, 10, 0),
        Decimal("28.00"),
        Decimal("40.00"),
    )
    for day in result.breakdown:
        print(day.to_dict())
    print("Total:", result.total)


if __name__ == "__main__":
    main()
