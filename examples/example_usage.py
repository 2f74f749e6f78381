"""Example: run payroll through the service layer (no Flask).

Controllers are thin; the business rules live in the services.
"""

import importlib
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_payroll.attendance_payroll.container import build_container
from src.attendance_payroll.attendance_payroll.core.enums import Role


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    today = date.today()
    results = container.payroll_service.run(
        current_role=Role.ADMIN,
        actor_id=1,
        start=today.replace(day=1),
        end=today,
        include_contributions=True,
    )
    for r in results:
        print(r.full_name, r.present_days, r.late_minutes, r.compensation.net_salary if r.compensation else "-")


if __name__ == "__main__":
    main()
