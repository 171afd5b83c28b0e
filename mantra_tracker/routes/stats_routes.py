# mantra_tracker/routes/stats_routes.py
from datetime import datetime

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from ..models.mantra import Mantra
from ..models.mantra_session import MantraSession
from ..services.stats import build_summary

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("", methods=["GET"])
@jwt_required()
def get_stats():
    """
    Returns:
    {
      "totalRepetitions": 540,
      "totalMantras": 3,
      "activeDays": 12,
      "currentStreak": 4,
      "dailyActivity": [{"date": "2024-05-01", "count": 108}, ...]   # last 30 days
    }
    """
    user_id = int(get_jwt_identity())

    try:
        mantras = Mantra.query.filter_by(user_id=user_id).all()
        sessions = MantraSession.query.filter_by(user_id=user_id).all()
    except Exception as e:
        current_app.logger.exception(f"Get stats error: {e}")
        return jsonify({"message": "Failed to fetch statistics"}), 500

    summary = build_summary(mantras, sessions, today=datetime.utcnow().date(), user_id=user_id)
    return jsonify(summary), 200
