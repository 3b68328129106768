import hashlib
import hmac
import json
import os
import time
from decimal import Decimal

os.environ["FLASK_ENV"] = "testing"

import pytest

from app import create_app
from models import db as _db
from models.users import User
from models.courses import Course
from models.course_lectures import Lecture
from models.purchases import Purchase
from utils.tokens import get_jwt_token


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """An active app context for tests that call managers directly."""
    with app.app_context():
        yield


def make_user(app, username, role="student", password="secret123"):
    with app.app_context():
        user = User(
            username=username,
            email=f"{username}@example.com",
            first_name=username.title(),
            last_name="Tester",
            role=role,
        )
        user.set_password(password)
        _db.session.add(user)
        _db.session.commit()
        return user.id


def make_course(app, creator_id, title="Python 101", price="499.00", lecture_count=4,
                published=True, category="Programming", level="Beginner", subtitle=None):
    """Returns (course_id, [lecture_ids in order])."""
    with app.app_context():
        course = Course(
            title=title,
            subtitle=subtitle,
            category=category,
            level=level,
            price=Decimal(price) if price is not None else None,
            is_published=published,
            creator_id=creator_id,
        )
        for position in range(1, lecture_count + 1):
            course.lectures.append(Lecture(title=f"{title} lecture {position}", position=position))
        _db.session.add(course)
        _db.session.commit()
        return course.id, [lecture.id for lecture in course.lectures]


def make_purchase(app, user_id, course_id, status="completed", payment_id=None, amount="499.00"):
    with app.app_context():
        purchase = Purchase(user_id=user_id, course_id=course_id, status=status,
                            payment_id=payment_id, amount=Decimal(amount))
        _db.session.add(purchase)
        _db.session.commit()
        return purchase.id


def auth_headers(app, user_id, role="student"):
    with app.app_context():
        token = get_jwt_token({"user_id": user_id, "username": f"user{user_id}", "role": role})
    return {"Authorization": f"Bearer {token}"}


def signed_webhook(app, event, secret=None, timestamp=None):
    """Body and Stripe-Signature header for an event, signed like the provider does."""
    secret = secret or app.config["STRIPE_WEBHOOK_SECRET"]
    timestamp = timestamp or int(time.time())
    body = json.dumps(event)
    signature = hmac.new(
        secret.encode("utf-8"),
        f"{timestamp}.{body}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return body, {"Stripe-Signature": f"t={timestamp},v1={signature}", "Content-Type": "application/json"}


def checkout_completed_event(session_id, amount_total=None):
    session = {"id": session_id, "object": "checkout.session"}
    if amount_total is not None:
        session["amount_total"] = amount_total
    return {"id": "evt_test", "type": "checkout.session.completed", "data": {"object": session}}


@pytest.fixture
def instructor_id(app):
    return make_user(app, "instructor", role="instructor")


@pytest.fixture
def student_id(app):
    return make_user(app, "student")


@pytest.fixture
def paid_course(app, instructor_id):
    return make_course(app, instructor_id)
