from models import db
from utils.helpers import format_datetime
from sqlalchemy.orm import relationship

PENDING = "pending"
COMPLETED = "completed"


class Purchase(db.Model):
    __tablename__ = "purchases"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=PENDING)  # 'pending', 'completed'
    payment_id = db.Column(db.String(255), nullable=True, unique=True, index=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    user = relationship("User")
    course = relationship("Course", back_populates="purchases")

    @property
    def is_completed(self):
        return self.status == COMPLETED

    def __repr__(self):
        return f"<Purchase User {self.user_id} Course {self.course_id} ({self.status})>"

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "course_id": self.course_id,
            "amount": float(self.amount) if self.amount is not None else 0.0,
            "status": self.status,
            "payment_id": self.payment_id,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
