"""Example: drive the service layer directly (no Flask).

Prints the first page of each employee's attendance and writes a report workbook
for the current month.
"""

import importlib
from pathlib import Path

from config import get_settings_module

from src.attendance_console.attendance_console.attendance.exporter import export_filename
from src.attendance_console.attendance_console.common.datetime_utils import today_local
from src.attendance_console.attendance_console.container import build_container
from src.attendance_console.attendance_console.core.exceptions import ValidationError


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for employee in container.employee_service.list_employees():
        page = container.attendance_service.view_page(employee.employee_id, page=1)
        print(employee.name, [(r.date, r.label) for r in page.rows])

    today = today_local()
    start = today.replace(day=1)
    try:
        payload = container.attendance_exporter.build_workbook(
            container.attendance_service.export_groups(), start=start, end=today
        )
    except ValidationError as e:
        print(e)
        return
    target = Path(export_filename(None, start, today))
    target.write_bytes(payload)
    print("wrote", target)


if __name__ == "__main__":
    main()
