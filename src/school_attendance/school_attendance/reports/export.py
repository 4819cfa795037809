"""Report downloads: CSV for spreadsheets, XLSX with colour-coded status."""
from __future__ import annotations

import csv
import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .service import DailyReport

CSV_FIELDS = ["student_id", "name", "class", "arrival", "departure", "status", "minutes_late"]

GREEN_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
YELLOW_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
RED_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
HEADER_FILL = PatternFill(start_color="E0E0E0", end_color="E0E0E0", fill_type="solid")

GREEN_FONT = Font(color="006100")
YELLOW_FONT = Font(color="9C6500")
RED_FONT = Font(color="9C0006")

THIN_BORDER = Border(
    left=Side(style="thin"), right=Side(style="thin"), top=Side(style="thin"), bottom=Side(style="thin")
)

_STATUS_STYLE = {
    "present": (GREEN_FILL, GREEN_FONT),
    "late": (YELLOW_FILL, YELLOW_FONT),
    "absent": (RED_FILL, RED_FONT),
}


def report_to_csv(report: DailyReport) -> bytes:
    """Checked-in students first, then the absent ones with status `absent`.

    Encoded as UTF-8 with BOM so Excel opens names correctly.
    """
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for row in report.rows:
        writer.writerow(row.to_dict())
    for s in report.absent_students:
        writer.writerow({**s, "status": "absent"})
    return out.getvalue().encode("utf-8-sig")


def _header(ws, row: int, titles) -> None:
    for col, title in enumerate(titles, 1):
        cell = ws.cell(row=row, column=col, value=title)
        cell.font = Font(bold=True)
        cell.border = THIN_BORDER
        cell.fill = HEADER_FILL


def _status_cell(ws, row: int, col: int, status: str) -> None:
    cell = ws.cell(row=row, column=col, value=status.title())
    cell.border = THIN_BORDER
    style = _STATUS_STYLE.get(status)
    if style:
        cell.fill, cell.font = style


def report_to_xlsx(report: DailyReport) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Attendance"

    counts = report.stats.counts()
    ws.merge_cells("A1:G1")
    ws["A1"] = f"Attendance Report - {counts['date']}"
    ws["A1"].font = Font(size=14, bold=True)
    ws["A1"].alignment = Alignment(horizontal="center")

    ws["A3"] = f"Present: {counts['present']}"
    ws["B3"] = f"Late: {counts['late']}"
    ws["C3"] = f"Absent: {counts['absent']}"
    ws["D3"] = f"Total: {counts['total']}"

    _header(ws, 5, ["Student ID", "Name", "Class", "Arrival", "Departure", "Status", "Min Late"])
    row_num = 6
    for r in report.rows:
        values = [r.student_id, r.name, r.class_name, r.arrival, r.departure]
        for col, value in enumerate(values, 1):
            ws.cell(row=row_num, column=col, value=value).border = THIN_BORDER
        _status_cell(ws, row_num, 6, r.status or "")
        ws.cell(row=row_num, column=7, value=r.minutes_late).border = THIN_BORDER
        row_num += 1

    if report.absent_students:
        row_num += 1
        ws.cell(row=row_num, column=1, value="Absent Students").font = Font(bold=True)
        row_num += 1
        _header(ws, row_num, ["Student ID", "Name", "Class", "Status"])
        row_num += 1
        for s in report.absent_students:
            for col, key in enumerate(["student_id", "name", "class"], 1):
                ws.cell(row=row_num, column=col, value=s[key]).border = THIN_BORDER
            _status_cell(ws, row_num, 4, "absent")
            row_num += 1

    for i, col in enumerate(ws.columns, 1):
        width = max((len(str(c.value)) for c in col if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(i)].width = max(10, width + 2)

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()
