import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from classsync.domain.AttendanceRecord import ATTENDED, CANCELLED
from classsync.logic.reporting.metrics import calculate_plan_metrics
from classsync.logic.reporting.report_text import format_long_date, group_history_by_month
from classsync.utilities.constants import DISPLAY_DATE_FORMAT


def generate_pdf_for_plan(plan, metrics=None):
    """Attendance report PDF: contract summary followed by one Date / Status / Detail table per month."""
    metrics = metrics or calculate_plan_metrics(plan)
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=30, leftMargin=30, topMargin=30, bottomMargin=30)

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Attendance History - {plan.student_name}", styles["Title"]),
        Spacer(1, 12),
    ]

    summary = [
        ["Start", plan.start.strftime(DISPLAY_DATE_FORMAT)],
        ["Original end", metrics.original_end_date.strftime(DISPLAY_DATE_FORMAT)],
        ["Projected end", format_long_date(metrics.current_end_date)],
        ["Attended", str(metrics.total_attended)],
        ["Cancellations", str(metrics.total_cancelled)],
        ["Makeup classes", str(metrics.total_cancelled_extending)],
    ]
    summary_table = Table(summary, hAlign="LEFT")
    summary_table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    elements += [summary_table, Spacer(1, 16)]

    for label, data in group_history_by_month(plan.history):
        elements.append(Paragraph(label, styles["Heading2"]))
        rows = [["Date", "Status", "Detail"]]
        records = sorted(data[ATTENDED] + data[CANCELLED], key=lambda r: r.date)
        for r in records:
            if r.status == ATTENDED:
                rows.append([r.day.strftime(DISPLAY_DATE_FORMAT), "Attended", r.time])
            else:
                kind = "Lost class" if r.extends_plan is False else "Makeup"
                rows.append([r.day.strftime(DISPLAY_DATE_FORMAT), f"Cancelled ({kind})", r.reason or ""])
        table = Table(rows, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4F46E5")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        elements += [table, Spacer(1, 12)]

    if metrics.is_extended:
        elements.append(Paragraph(
            f"Rescheduled cancellations moved the original end "
            f"({metrics.original_end_date.strftime(DISPLAY_DATE_FORMAT)}) to "
            f"{format_long_date(metrics.current_end_date)}.",
            styles["Italic"],
        ))

    doc.build(elements)
    return buf.getvalue()
