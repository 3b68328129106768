from models import db
from models import Course
from models import Enrolment

class EnrolmentManager:
    @staticmethod
    def enroll_student(course_id, user_id):
        """Enrol a user once; returns False for an unknown course."""
        course = db.session.get(Course, course_id)
        if not course:
            return False

        enrolment = Enrolment.query.filter_by(course_id=course_id, student_id=user_id).first()
        if not enrolment:
            db.session.add(Enrolment(course_id=course_id, student_id=user_id))
        db.session.commit()
        return True

    @staticmethod
    def enrolled_courses(user_id):
        enrolments = Enrolment.query.filter_by(student_id=user_id).order_by(Enrolment.enrolled_at.desc()).all()
        return [enrolment.course for enrolment in enrolments]
