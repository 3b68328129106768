from sqlalchemy.orm import relationship
from models import db
from utils.helpers import format_datetime


class Lecture(db.Model):
    __tablename__ = "course_lectures"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    video_url = db.Column(db.String(255), nullable=True)
    is_preview_free = db.Column(db.Boolean, default=False, nullable=False)
    position = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="lectures")

    @staticmethod
    def get_next_position(course_id):
        last_lecture = Lecture.query.filter_by(course_id=course_id).order_by(Lecture.position.desc()).first()
        return (last_lecture.position + 1) if last_lecture else 1

    def __repr__(self):
        return f"<Lecture {self.title} (Course ID {self.course_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "video_url": self.video_url,
            "is_preview_free": self.is_preview_free,
            "position": self.position,
            "created_at": format_datetime(self.created_at)
        }
