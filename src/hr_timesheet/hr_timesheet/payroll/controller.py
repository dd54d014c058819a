from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import first_of_month, format_month
from ..common.web import admin_required, current_role, json_body, write_csv, write_xlsx
from ..container import Container
from ..core.constants import DEFAULT_STATISTICS_MONTHS, HOURS_PRECISION
from ..core.exceptions import ValidationError
from .model import SalaryRecord

EXPORT_FIELDS = [
    "Employee", "Email", "Month", "Base Salary", "Bonus", "Deductions", "Total Salary", "Hours Worked", "Notes",
]


def _salary_json(r: SalaryRecord) -> dict:
    return {
        "salary_id": r.salary_id,
        "user_id": r.user_id,
        "month": format_month(r.month),
        "base_salary": r.base_salary,
        "bonus": r.bonus,
        "deductions": r.deductions,
        "hours_worked": r.hours_worked,
        "total_salary": r.total_salary,
        "notes": r.notes,
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/salaries", methods=["GET"], endpoint="list_salaries")
    @admin_required
    def list_salaries():
        since = request.args.get("since")
        records = container.salary_service.list_salaries(first_of_month(since) if since else None)
        return jsonify([_salary_json(r) for r in records])

    @app.route("/api/salaries", methods=["POST"], endpoint="save_salary")
    @admin_required
    def save_salary():
        data = json_body()
        user_id = data.get("user_id")
        if user_id in (None, ""):
            raise ValidationError("Employee, month and base salary are required")

        record = container.salary_service.save_salary(
            current_role=current_role(),
            user_id=int(user_id),
            year_month=data.get("month", ""),
            base_salary=data.get("base_salary"),
            bonus=data.get("bonus", 0),
            deductions=data.get("deductions", 0),
            notes=data.get("notes"),
        )
        return jsonify(_salary_json(record))

    @app.route("/api/salaries/preview", methods=["GET"], endpoint="preview_salary_hours")
    @admin_required
    def preview_salary_hours():
        user_id = request.args.get("user_id", type=int)
        month = request.args.get("month") or date.today().strftime("%Y-%m")
        if not user_id:
            raise ValidationError("user_id is required")

        report = container.salary_service.month_report(user_id, month)
        return jsonify(
            {
                "user_id": user_id,
                "month": format_month(first_of_month(month)),
                "hours_worked": round(report.total_hours, HOURS_PRECISION),
                "days_paired": sum(1 for h in report.hours_by_day.values() if h > 0),
                "issues": [
                    {"date": i.work_date.isoformat(), "kind": i.kind.value, "detail": i.detail}
                    for i in report.issues
                ],
            }
        )

    @app.route("/api/salaries/statistics", methods=["GET"], endpoint="salary_statistics")
    @admin_required
    def salary_statistics():
        months = request.args.get("months", DEFAULT_STATISTICS_MONTHS, type=int)
        stats = container.salary_statistics_service
        trends = stats.monthly_trends(months)
        return jsonify(
            {
                "months": months,
                "summary": asdict(stats.summary(months)),
                "monthly_trends": [
                    {"month": format_month(t.month), "label": t.label, "total": t.total,
                     "avg_salary": t.avg_salary, "total_bonus": t.total_bonus}
                    for t in trends
                ],
                "employee_comparisons": [asdict(c) for c in stats.employee_comparisons(months)],
            }
        )

    def _export_rows() -> list[dict]:
        names = container.user_service.display_names()
        emails = container.user_service.emails()
        return [
            {
                "Employee": names.get(r.user_id, "Unknown"),
                "Email": emails.get(r.user_id, ""),
                "Month": r.month.strftime("%b %Y"),
                "Base Salary": f"{r.base_salary:.2f}",
                "Bonus": f"{r.bonus:.2f}",
                "Deductions": f"{r.deductions:.2f}",
                "Total Salary": f"{r.total_salary:.2f}",
                "Hours Worked": f"{r.hours_worked:.2f}",
                "Notes": r.notes or "",
            }
            for r in container.salary_service.list_salaries()
        ]

    @app.route("/api/salaries/export.csv", methods=["GET"], endpoint="salary_export_csv")
    @admin_required
    def salary_export_csv():
        filename = f"salaries_{date.today().strftime('%Y-%m-%d')}.csv"
        return write_csv(app, rows=_export_rows(), fieldnames=EXPORT_FIELDS, filename=filename)

    @app.route("/api/salaries/export.xlsx", methods=["GET"], endpoint="salary_export_xlsx")
    @admin_required
    def salary_export_xlsx():
        return write_xlsx(
            rows=_export_rows(),
            fieldnames=EXPORT_FIELDS,
            sheet_name="Salaries",
            filename=f"salaries_{date.today().strftime('%Y-%m-%d')}.xlsx",
            column_widths=[20, 25, 12, 15, 15, 15, 18, 15, 30],
        )
