"""Example: preview a salary through the service layer (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
import sys

from payroll_system.config import get_settings_module
from payroll_system.container import build_container


def main():
    employee_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    month = sys.argv[2] if len(sys.argv) > 2 else "2024-03"

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    breakdown = container.payroll_service.preview(employee_id=employee_id, month=month)
    print(breakdown.to_dict())


if __name__ == "__main__":
    main()
