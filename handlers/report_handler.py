"""
handlers/report_handler.py
--------------------------
HTTP endpoints for the reports and their CSV / Excel exports.
Delegates to ReportService and ExportService.
"""

from datetime import date

from flask import Blueprint, jsonify, request, send_file

from handlers.context import get_context
from handlers.errors import InvalidRequestError, json_errors

report_blueprint = Blueprint("reports", __name__)

_XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@report_blueprint.route("/reports/export", methods=["GET"])
@json_errors("Failed to export reports")
def export_all_reports():
    buffer = get_context().exports.export_all_reports_excel()
    return send_file(
        buffer,
        mimetype=_XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"prison_reports_{date.today():%Y_%m_%d}.xlsx",
    )


@report_blueprint.route("/reports/<name>", methods=["GET"])
@json_errors("Failed to retrieve report data")
def run_report(name: str):
    return jsonify(get_context().reports.run(name))


@report_blueprint.route("/reports/<name>/export", methods=["GET"])
@json_errors("Failed to export report")
def export_report(name: str):
    """Download one report; ``?format=csv`` (default) or ``?format=xlsx``."""
    exports = get_context().exports
    fmt = request.args.get("format", "csv").lower()
    filename = f"{name.replace('-', '_')}_{date.today():%Y_%m_%d}"

    if fmt == "csv":
        buffer = exports.export_report_csv(name)
        return send_file(buffer, mimetype="text/csv", as_attachment=True, download_name=f"{filename}.csv")
    if fmt == "xlsx":
        buffer = exports.export_report_excel(name)
        return send_file(buffer, mimetype=_XLSX_MIMETYPE, as_attachment=True, download_name=f"{filename}.xlsx")
    raise InvalidRequestError(f"Unsupported export format '{fmt}', use csv or xlsx")
