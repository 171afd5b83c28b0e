# mantra_tracker/routes/mantra_routes.py

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import db
from ..models.mantra import Mantra

mantras_bp = Blueprint("mantras", __name__)


# ------------------------------
# Helpers
# ------------------------------
def _clean_text(v: Any) -> Optional[str]:
    if not isinstance(v, str):
        return None
    v = v.strip()
    return v or None


def _clean_goal(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if not isinstance(v, int) or v < 1:
        return None
    return v


def _parse_mantra_payload(
    data: Dict[str, Any], partial: bool = False
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validates title / text / goal.
    With partial=True (PUT) missing fields are simply left out.
    """
    values: Dict[str, Any] = {}
    errors: List[str] = []

    for field in ("title", "text"):
        if field not in data:
            if not partial:
                errors.append(f"{field} is required")
            continue
        cleaned = _clean_text(data.get(field))
        if cleaned is None:
            errors.append(f"{field} must be a non-empty string")
        else:
            values[field] = cleaned

    if "goal" not in data:
        if not partial:
            errors.append("goal is required")
    else:
        goal = _clean_goal(data.get("goal"))
        if goal is None:
            errors.append("goal must be an integer >= 1")
        else:
            values["goal"] = goal

    return values, errors


def _get_owned_mantra(mantra_id: int, user_id: int) -> Optional[Mantra]:
    return Mantra.query.filter_by(id=mantra_id, user_id=user_id).first()


# ------------------------------
# GET /api/mantras
# ------------------------------
@mantras_bp.route("", methods=["GET"])
@jwt_required()
def list_mantras():
    user_id = int(get_jwt_identity())

    rows: List[Mantra] = (
        Mantra.query.filter_by(user_id=user_id)
        .order_by(Mantra.created_at.asc(), Mantra.id.asc())
        .all()
    )
    return jsonify({"mantras": [m.to_dict() for m in rows]}), 200


# ------------------------------
# POST /api/mantras
# ------------------------------
@mantras_bp.route("", methods=["POST"])
@jwt_required()
def create_mantra():
    """
    Expected body:
    {
      "title": "Morning",
      "text": "Om namah shivaya",
      "goal": 108
    }
    """
    user_id = int(get_jwt_identity())
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict):
        return jsonify({"message": "Invalid mantra data"}), 400

    values, errors = _parse_mantra_payload(data)
    if errors:
        return jsonify({"message": "Invalid mantra data", "errors": errors}), 400

    try:
        mantra = Mantra(user_id=user_id, **values)
        db.session.add(mantra)
        db.session.commit()

        return jsonify({"mantra": mantra.to_dict()}), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Create mantra error: {e}")
        return jsonify({"message": "Failed to create mantra"}), 500


# ------------------------------
# GET /api/mantras/<id>
# ------------------------------
@mantras_bp.route("/<int:mantra_id>", methods=["GET"])
@jwt_required()
def get_mantra(mantra_id):
    user_id = int(get_jwt_identity())

    mantra = _get_owned_mantra(mantra_id, user_id)
    if not mantra:
        return jsonify({"message": "Mantra not found"}), 404
    return jsonify({"mantra": mantra.to_dict()}), 200


# ------------------------------
# PUT /api/mantras/<id>
# ------------------------------
@mantras_bp.route("/<int:mantra_id>", methods=["PUT"])
@jwt_required()
def update_mantra(mantra_id):
    user_id = int(get_jwt_identity())
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict):
        return jsonify({"message": "Invalid update data"}), 400

    values, errors = _parse_mantra_payload(data, partial=True)
    if errors:
        return jsonify({"message": "Invalid update data", "errors": errors}), 400

    mantra = _get_owned_mantra(mantra_id, user_id)
    if not mantra:
        return jsonify({"message": "Mantra not found"}), 404

    try:
        for key, value in values.items():
            setattr(mantra, key, value)
        # touch updated_at even when nothing else changed
        mantra.updated_at = datetime.utcnow()
        db.session.commit()

        return jsonify({"mantra": mantra.to_dict()}), 200

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Update mantra error: {e}")
        return jsonify({"message": "Failed to update mantra"}), 500


# ------------------------------
# DELETE /api/mantras/<id>
# ------------------------------
@mantras_bp.route("/<int:mantra_id>", methods=["DELETE"])
@jwt_required()
def delete_mantra(mantra_id):
    user_id = int(get_jwt_identity())

    mantra = _get_owned_mantra(mantra_id, user_id)
    if not mantra:
        return jsonify({"message": "Mantra not found"}), 404

    try:
        # sessions go with it (relationship cascade)
        db.session.delete(mantra)
        db.session.commit()

        return jsonify({"message": "Mantra deleted"}), 200

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Delete mantra error: {e}")
        return jsonify({"message": "Failed to delete mantra"}), 500
