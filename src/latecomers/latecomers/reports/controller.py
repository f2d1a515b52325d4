from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.decorators import login_required
from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from .service import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    def _load_report():
        return container.report_service.build_month_report(request.args.get("month", ""))

    @app.route("/api/reports", methods=["GET"], endpoint="api_reports")
    @login_required
    def api_reports():
        try:
            report = _load_report()
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError:
            app.logger.exception("Error retrieving report data")
            return jsonify({"success": False, "message": "Failed to retrieve data. Please try again later."}), 500

        return jsonify(
            {
                "success": True,
                "month": report.month_key,
                "period": report.period_tag,
                "count": len(report.rows),
                "rows": report.rows,
                "notice": report.notice,
            }
        ), 200

    @app.route("/api/reports/export", methods=["GET"], endpoint="api_reports_export")
    @login_required
    def api_reports_export():
        try:
            report = _load_report()
            content = container.report_service.export_workbook(report)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError:
            app.logger.exception("Error exporting data")
            return jsonify({"success": False, "message": "Failed to export data. Please try again later."}), 500

        if content is None:
            return jsonify({"success": False, "message": report.notice}), 404

        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=report.filename,
        )
