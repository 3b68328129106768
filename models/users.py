from models import db
from utils.helpers import format_datetime
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ("student", "instructor")


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), nullable=False, unique=True)
    email = db.Column(db.String(100), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="student")  # 'student', 'instructor'
    phone_number = db.Column(db.String(20), nullable=True)
    country = db.Column(db.String(60), nullable=True)
    photo_url = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    courses = db.relationship("Course", back_populates="creator")
    enrolments = db.relationship("Enrolment", back_populates="student", cascade="all, delete-orphan")

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
            "phone_number": self.phone_number,
            "country": self.country,
            "photo_url": self.photo_url,
            "created_at": format_datetime(self.created_at),
        }
