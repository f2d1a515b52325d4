from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_timestamp
from ..common.decorators import current_account_id, login_required
from ..core.exceptions import StoreError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/late-comers/<roll_number>/settle", methods=["POST"], endpoint="api_settle_fine")
    @login_required
    def api_settle_fine(roll_number: str):
        data = request.get_json(silent=True) or {}
        try:
            result = container.settlement_service.settle(
                current_account_id(), roll_number, confirmed=bool(data.get("confirm"))
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError:
            app.logger.exception("Error updating payment")
            return jsonify({"success": False, "message": "Failed to update payment. Please try again."}), 500

        rec = result.record
        return jsonify(
            {
                "success": True,
                "amount": result.amount,
                "notice": result.notice.as_dict(),
                "record": {
                    "id": rec.archive_id,
                    "rollNumber": rec.roll_number,
                    "dept": rec.dept,
                    "count": rec.count,
                    "fine": rec.fine,
                    "totalAmount": rec.total_amount,
                    "status": rec.status,
                    "createdAt": rec.created_at,
                    "archivedAt": format_timestamp(rec.archived_at),
                },
            }
        ), 200
