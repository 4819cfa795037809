from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import require_capability
from ..common.http import json_body, query_date
from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Capability, TotalBasis
from ..reports.export import report_to_csv, report_to_xlsx
from ..reports.service import parse_total_basis

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _scope():
        return container.academic_year_service.resolve_scope(request.args.get("academic_year_id"))

    def _report():
        return reports.report(
            query_date(),
            academic_year_id=_scope(),
            basis=parse_total_basis(request.args.get("total"), TotalBasis.ROSTER),
        )

    def _download(payload: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @require_capability(Capability.SCANNER)
    def attendance_checkin():
        data = json_body()
        result = container.attendance_service.record_scan(
            data.get("qr_data"),
            data.get("client_date"),
            data.get("client_time"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        stats = reports.stats(
            query_date(),
            academic_year_id=_scope(),
            basis=parse_total_basis(request.args.get("total"), TotalBasis.CHECKED_IN),
        )
        return jsonify(stats.to_dict())

    @app.route("/api/attendance/entries", methods=["GET"], endpoint="attendance_entries")
    def attendance_entries():
        day = query_date()
        entries = reports.entries(day, academic_year_id=_scope())
        return jsonify({"success": True, "date": day.isoformat(), "entries": [e.to_dict() for e in entries]})

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        return jsonify(_report().to_dict())

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    def attendance_report_csv():
        report = _report()
        return _download(
            report_to_csv(report),
            mimetype="text/csv",
            filename=f"attendance-report-{report.stats.day.isoformat()}.csv",
        )

    @app.route("/api/attendance/report.xlsx", methods=["GET"], endpoint="attendance_report_xlsx")
    def attendance_report_xlsx():
        report = _report()
        return _download(
            report_to_xlsx(report),
            mimetype=XLSX_MIMETYPE,
            filename=f"attendance-report-{report.stats.day.isoformat()}.xlsx",
        )

    @app.route("/api/attendance/all", methods=["DELETE"], endpoint="attendance_delete_all")
    @require_capability(Capability.ADMIN)
    def attendance_delete_all():
        year_id = optional_int(request.args.get("academic_year_id"), "academic_year_id")
        scope = container.academic_year_service.get_year(year_id).academic_year_id if year_id is not None else None
        deleted = container.attendance_service.delete_all(academic_year_id=scope)
        return jsonify({"success": True, "message": f"Deleted {deleted} attendance records", "deleted": deleted})
