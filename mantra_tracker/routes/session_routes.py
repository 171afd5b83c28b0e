# mantra_tracker/routes/session_routes.py

from datetime import datetime
from typing import Any, List, Optional

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import db
from ..models.mantra import Mantra
from ..models.mantra_session import MantraSession
from ..utils import parse_iso_datetime, safe_int_or_none

sessions_bp = Blueprint("sessions", __name__)


def _clean_count(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if not isinstance(v, int) or v < 1:
        return None
    return v


# ------------------------------
# GET /api/sessions?mantra_id=3
# ------------------------------
@sessions_bp.route("", methods=["GET"])
@jwt_required()
def list_sessions():
    user_id = int(get_jwt_identity())

    q = MantraSession.query.filter_by(user_id=user_id)

    raw_mantra_id = request.args.get("mantra_id")
    if raw_mantra_id is not None:
        mantra_id = safe_int_or_none(raw_mantra_id)
        if mantra_id is None:
            return jsonify({"message": "mantra_id must be an integer"}), 400
        q = q.filter_by(mantra_id=mantra_id)

    rows: List[MantraSession] = (
        q.order_by(MantraSession.date.desc(), MantraSession.id.desc()).all()
    )
    return jsonify({"sessions": [s.to_dict() for s in rows]}), 200


# ------------------------------
# POST /api/sessions
# ------------------------------
@sessions_bp.route("", methods=["POST"])
@jwt_required()
def create_session():
    """
    Expected body:
    {
      "mantraId": 3,                       # "mantra_id" also accepted
      "count": 27,
      "date": "2024-05-01T06:30:00Z"       # optional, defaults to now
    }
    """
    user_id = int(get_jwt_identity())
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"message": "Invalid session data"}), 400

    errors = []

    raw_mantra_id = data.get("mantraId", data.get("mantra_id"))
    mantra_id = safe_int_or_none(raw_mantra_id)
    if mantra_id is None:
        errors.append("mantraId must be an existing mantra id")

    count = _clean_count(data.get("count"))
    if count is None:
        errors.append("count must be an integer >= 1")

    raw_date = data.get("date")
    practiced_at = None
    if raw_date is not None:
        practiced_at = parse_iso_datetime(raw_date)
        if practiced_at is None:
            errors.append("date must be an ISO-8601 datetime")

    if errors:
        return jsonify({"message": "Invalid session data", "errors": errors}), 400

    # The mantra has to belong to the caller
    mantra = Mantra.query.filter_by(id=mantra_id, user_id=user_id).first()
    if not mantra:
        return jsonify({"message": "Mantra not found"}), 404

    try:
        session = MantraSession(
            user_id=user_id,
            mantra_id=mantra.id,
            count=count,
            date=practiced_at or datetime.utcnow(),
        )
        db.session.add(session)
        db.session.commit()

        return jsonify({"session": session.to_dict()}), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Create session error: {e}")
        return jsonify({"message": "Failed to create session"}), 500
