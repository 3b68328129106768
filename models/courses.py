from models import db
from utils.helpers import format_datetime
from sqlalchemy.orm import relationship

LEVELS = ("Beginner", "Intermediate", "Advanced")


class Course(db.Model):
    __tablename__ = "courses"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=False)
    level = db.Column(db.String(20), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=True)
    thumbnail_url = db.Column(db.String(255), nullable=True)
    is_published = db.Column(db.Boolean, default=False, nullable=False)
    creator_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    creator = relationship("User", back_populates="courses")
    lectures = relationship(
        "Lecture",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Lecture.position",
    )
    purchases = relationship("Purchase", back_populates="course")
    enrolments = relationship("Enrolment", back_populates="course", cascade="all, delete-orphan")
    progress_records = relationship("CourseProgress", back_populates="course", cascade="all, delete-orphan")

    @property
    def is_free(self):
        return self.price is None or self.price <= 0

    def __repr__(self):
        return f"<Course {self.title} (Creator ID {self.creator_id})>"

    def to_dict(self, include_lectures=False):
        data = {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "category": self.category,
            "level": self.level,
            "price": float(self.price) if self.price is not None else None,
            "thumbnail_url": self.thumbnail_url,
            "is_published": self.is_published,
            "creator": {
                "id": self.creator.id,
                "first_name": self.creator.first_name,
                "last_name": self.creator.last_name,
            } if self.creator else None,
            "lecture_count": len(self.lectures),
            "created_at": format_datetime(self.created_at),
        }
        if include_lectures:
            data["lectures"] = [lecture.to_dict() for lecture in self.lectures]
        return data
