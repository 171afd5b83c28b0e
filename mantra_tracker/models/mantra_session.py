# mantra_tracker/models/mantra_session.py
from datetime import datetime
from .. import db

class MantraSession(db.Model):
    """One logged practice: `count` repetitions of a mantra on `date`.

    Sessions are never updated; they go away only when their mantra or
    user is deleted.
    """

    __tablename__ = "sessions"

    id = db.Column(db.BigInteger().with_variant(db.Integer, "sqlite"), primary_key=True)
    user_id = db.Column(
        db.BigInteger().with_variant(db.Integer, "sqlite"),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mantra_id = db.Column(
        db.BigInteger().with_variant(db.Integer, "sqlite"),
        db.ForeignKey("mantras.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    count = db.Column(db.Integer, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", back_populates="sessions")
    mantra = db.relationship("Mantra", back_populates="sessions")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "mantraId": self.mantra_id,
            "count": self.count,
            "date": self.date.isoformat() if self.date else None,
        }
