from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User

from models.courses import Course
from models.course_lectures import Lecture

from models.purchases import Purchase
from models.enrolments import Enrolment

from models.course_progress import CourseProgress, LectureProgress
