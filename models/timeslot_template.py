from models.db import db

class WeeklyTimeslotTemplate(db.Model):
    __tablename__ = "weekly_timeslot_templates"

    id = db.Column(db.Integer, primary_key=True)

    service_id = db.Column(
        db.Integer,
        db.ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_of_week = db.Column(db.Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)
    enabled = db.Column(db.Boolean, default=True, nullable=False)

    service = db.relationship("Service", back_populates="templates")

    __table_args__ = (
        # One definition per service, weekday and start time
        db.UniqueConstraint("service_id", "day_of_week", "start_time", name="uq_template_service_day_start"),
        db.CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_template_day_of_week"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "enabled": self.enabled,
        }
