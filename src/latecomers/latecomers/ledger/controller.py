from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import current_account_id, login_required
from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from .barcode import decode_roll_number
from .model import LedgerEntry, MarkResult


def _entry_json(entry: LedgerEntry, container: Container) -> dict:
    return {
        "rollNumber": entry.roll_number,
        "count": entry.count,
        "fine": entry.fine,
        "fineAmount": container.policy.amount_for(entry.fine),
        "status": entry.status,
        "createdAt": entry.created_at,
    }


def register(app: Flask, container: Container) -> None:
    def _mark(roll_number: str):
        try:
            result: MarkResult = container.ledger_service.mark_late(current_account_id(), roll_number)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError:
            app.logger.exception("Error marking attendance")
            return jsonify({"success": False, "message": "Failed to mark attendance. Please try again."}), 500

        return jsonify(
            {
                "success": True,
                "fined": result.fined,
                "entry": _entry_json(result.entry, container),
                "notice": result.notice.as_dict(),
            }
        ), 200

    @app.route("/api/late-marks", methods=["POST"], endpoint="api_mark_late")
    @login_required
    def api_mark_late():
        data = request.get_json(silent=True) or {}
        roll_number = str(data.get("rollNumber", "")).strip()
        return _mark(roll_number)

    @app.route("/api/late-marks/scan", methods=["POST"], endpoint="api_mark_late_scan")
    @login_required
    def api_mark_late_scan():
        """Mark late from a photo of the student's ID-card barcode."""
        if "image" not in request.files:
            return jsonify({"success": False, "message": "No image uploaded"}), 400

        try:
            roll_number = decode_roll_number(request.files["image"].stream)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return _mark(roll_number)

    @app.route("/api/late-comers", methods=["GET"], endpoint="api_late_comers")
    @login_required
    def api_late_comers():
        try:
            overview = container.ledger_service.fined_overview(
                current_account_id(), search=request.args.get("search", "")
            )
        except StoreError:
            app.logger.exception("Error loading late comers")
            return jsonify({"success": False, "message": "Failed to load late comers"}), 500

        return jsonify(
            {
                "success": True,
                "dept": overview.dept,
                "threshold": container.policy.threshold,
                "totalPending": overview.total_pending,
                "rows": [_entry_json(e, container) for e in overview.entries],
            }
        ), 200
