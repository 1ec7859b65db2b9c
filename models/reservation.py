from datetime import datetime
from models.db import db

STATUS_CONFIRMED = "confirmed"
STATUS_CANCELLED = "cancelled"

class Reservation(db.Model):
    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = db.Column(db.Integer, db.ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)

    # Copied at booking time, survives a later rename of the service
    service_name = db.Column(db.String(255), nullable=False)

    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.Time, nullable=False)

    status = db.Column(db.String(20), nullable=False, default=STATUS_CONFIRMED)
    # status values: confirmed, cancelled

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship("User", back_populates="reservations")
    service = db.relationship("Service", back_populates="reservations")

    __table_args__ = (
        # Hard business rule: one confirmed reservation per service, date and time (prevents double booking).
        # Cancelled rows stay as history, so the index only covers confirmed ones.
        db.Index(
            "uq_reservation_confirmed_slot",
            "service_id",
            "date",
            "time",
            unique=True,
            sqlite_where=db.text("status = 'confirmed'"),
            postgresql_where=db.text("status = 'confirmed'"),
        ),
    )

    @property
    def is_confirmed(self):
        return self.status == STATUS_CONFIRMED

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }
