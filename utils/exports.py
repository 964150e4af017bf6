"""
utils/exports.py
----------------
Render audit log rows as CSV, Excel or PDF files for download.
"""

import io
import csv
from datetime import datetime, timezone

from openpyxl import Workbook
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

EXPORT_COLUMNS = ["Audit Code", "Action", "Collection", "Document", "Changes", "User", "Time"]

MIMETYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
}


def _format_time(epoch_ms):
    if epoch_ms is None:
        return ""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def audit_rows(audits):
    """Flatten serialised audit entries into export rows."""
    rows = []
    for audit in audits:
        user = audit.get("user") or {}
        rows.append([
            audit.get("auditCode", ""),
            audit.get("action", ""),
            audit.get("collection", ""),
            audit.get("document", ""),
            audit.get("changes", ""),
            user.get("username") or user.get("email") or "",
            _format_time(audit.get("timeStamp")),
        ])
    return rows


# ---------------- CSV ----------------
def to_csv(rows):
    si = io.StringIO()
    cw = csv.writer(si)
    cw.writerow(EXPORT_COLUMNS)
    cw.writerows(rows)

    output = io.BytesIO()
    output.write(si.getvalue().encode("utf-8"))
    output.seek(0)
    return output


# ---------------- Excel ----------------
def to_xlsx(rows):
    wb = Workbook()
    ws = wb.active
    ws.title = "Audit Log"
    ws.append(EXPORT_COLUMNS)
    for row in rows:
        ws.append(row)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output


# ---------------- PDF ----------------
PDF_COLUMN_X = [30, 150, 210, 290, 470, 600, 680]


def to_pdf(rows):
    buffer = io.BytesIO()
    page_size = landscape(A4)
    c = canvas.Canvas(buffer, pagesize=page_size)
    width, height = page_size

    def header(y):
        c.setFont("Helvetica-Bold", 9)
        for x, title in zip(PDF_COLUMN_X, EXPORT_COLUMNS):
            c.drawString(x, y, title)
        c.setFont("Helvetica", 8)
        return y - 18

    y = height - 40
    c.setFont("Helvetica-Bold", 14)
    c.drawString(30, y, "Audit Log Report")
    y = header(y - 30)

    for row in rows:
        if y < 40:
            c.showPage()
            y = header(height - 40)
        for x, value in zip(PDF_COLUMN_X, row):
            # audit codes are long, keep the columns from overlapping
            c.drawString(x, y, str(value)[:28])
        y -= 14

    c.save()
    buffer.seek(0)
    return buffer


WRITERS = {"csv": to_csv, "xlsx": to_xlsx, "pdf": to_pdf}
