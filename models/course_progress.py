from models import db
from datetime import datetime
from sqlalchemy.orm import relationship


class CourseProgress(db.Model):
    __tablename__ = "course_progress"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    course = relationship("Course", back_populates="progress_records")
    lectures = relationship("LectureProgress", back_populates="progress", cascade="all, delete-orphan")

    __table_args__ = (
        db.UniqueConstraint("user_id", "course_id", name="unique_user_course_progress"),
    )

    @property
    def viewed_lecture_ids(self):
        return {entry.lecture_id for entry in self.lectures}

    def __repr__(self):
        return f"<CourseProgress User {self.user_id} Course {self.course_id}>"


class LectureProgress(db.Model):
    __tablename__ = "lecture_progress"

    id = db.Column(db.Integer, primary_key=True)
    progress_id = db.Column(db.Integer, db.ForeignKey("course_progress.id"), nullable=False)
    lecture_id = db.Column(db.Integer, db.ForeignKey("course_lectures.id"), nullable=False)
    viewed_at = db.Column(db.DateTime, default=datetime.utcnow)

    progress = relationship("CourseProgress", back_populates="lectures")

    __table_args__ = (
        db.UniqueConstraint("progress_id", "lecture_id", name="unique_progress_lecture"),
    )
