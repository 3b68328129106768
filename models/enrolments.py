from models import db

class Enrolment(db.Model):
    __tablename__ = 'enrolments'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    enrolled_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    student = db.relationship("User", back_populates="enrolments")
    course = db.relationship("Course", back_populates="enrolments")

    __table_args__ = (
        db.UniqueConstraint("student_id", "course_id", name="unique_student_course_enrolment"),
    )

    def __repr__(self):
        return f"<Enrolment Student {self.student_id} Course {self.course_id}>"
