# mantra_tracker/models/mantra.py
from datetime import datetime
from .. import db

class Mantra(db.Model):
    __tablename__ = "mantras"

    id = db.Column(db.BigInteger().with_variant(db.Integer, "sqlite"), primary_key=True)
    user_id = db.Column(
        db.BigInteger().with_variant(db.Integer, "sqlite"),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(200), nullable=False)
    text = db.Column(db.Text, nullable=False)
    goal = db.Column(db.Integer, nullable=False)   # target repetition count

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", back_populates="mantras")
    sessions = db.relationship(
        "MantraSession",
        back_populates="mantra",
        cascade="all, delete",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "text": self.text,
            "goal": self.goal,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
