from datetime import datetime
from models.db import db

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    reservations = db.relationship(
        "Reservation",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    sessions = db.relationship(
        "Session",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return {"id": self.id, "email": self.email, "name": self.name}
