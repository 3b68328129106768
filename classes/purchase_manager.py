import logging
from decimal import Decimal

from sqlalchemy import func, select
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.courses import Course
from models.purchases import Purchase, PENDING, COMPLETED
from classes.enrolment_manager import EnrolmentManager
from utils import payment_service

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class PurchaseManager:
    @staticmethod
    def get_completed_purchase(user_id, course_id):
        return Purchase.query.filter_by(user_id=user_id, course_id=course_id, status=COMPLETED).first()

    @staticmethod
    def has_access(user_id, course):
        """Creator, free course, or a completed purchase."""
        if course.creator_id == user_id:
            return True
        if course.is_free:
            return True
        return PurchaseManager.get_completed_purchase(user_id, course.id) is not None

    @staticmethod
    def create_checkout(user_id, course_id):
        course = db.session.get(Course, course_id)
        if not course:
            raise NotFound("Course not found")
        if course.creator_id == user_id:
            raise BadRequest("You cannot purchase your own course")
        if not course.is_published:
            raise BadRequest("Course is not available for purchase")
        if course.is_free:
            raise BadRequest("This course is free")
        if PurchaseManager.get_completed_purchase(user_id, course_id):
            raise BadRequest("Course already purchased")

        purchase = Purchase.query.filter_by(user_id=user_id, course_id=course_id, status=PENDING).first()
        if not purchase:
            purchase = Purchase(user_id=user_id, course_id=course_id, status=PENDING)
            db.session.add(purchase)
        purchase.amount = course.price
        db.session.flush()

        try:
            session_id, url = payment_service.create_checkout_session(course, user_id, purchase.id)
        except payment_service.PaymentError as e:
            db.session.rollback()
            raise BadRequest(str(e))

        if not url:
            db.session.rollback()
            raise BadRequest("Error while creating checkout session")

        purchase.payment_id = session_id
        db.session.commit()
        logger.info("Checkout session %s created for user %s course %s", session_id, user_id, course_id)
        return url

    @staticmethod
    def handle_webhook_event(event):
        """Apply a verified provider event. Returns True when a purchase is (now) completed."""
        event_type = event.get("type")
        if event_type != CHECKOUT_COMPLETED:
            logger.info("Ignoring webhook event of type %s", event_type)
            return False

        session = (event.get("data") or {}).get("object") or {}
        session_id = session.get("id")
        purchase = Purchase.query.filter_by(payment_id=session_id).first() if session_id else None
        if not purchase:
            logger.warning("No purchase found for checkout session %s", session_id)
            return False

        if purchase.is_completed:
            logger.info("Purchase %s already completed", purchase.id)
            return True

        if session.get("amount_total") is not None:
            purchase.amount = Decimal(session["amount_total"]) / 100
        purchase.status = COMPLETED

        EnrolmentManager.enroll_student(purchase.course_id, purchase.user_id)
        db.session.commit()
        logger.info("Purchase %s completed for user %s course %s", purchase.id, purchase.user_id, purchase.course_id)
        return True

    @staticmethod
    def completed_purchases(user_id):
        return (
            Purchase.query.filter_by(user_id=user_id, status=COMPLETED)
            .order_by(Purchase.updated_at.desc())
            .all()
        )

    @staticmethod
    def pending_purchases(user_id):
        """Pending purchases, minus courses the user has since bought."""
        owned = select(Purchase.course_id).where(
            Purchase.user_id == user_id,
            Purchase.status == COMPLETED,
        )
        return (
            Purchase.query.filter(
                Purchase.user_id == user_id,
                Purchase.status == PENDING,
                Purchase.course_id.not_in(owned),
            )
            .order_by(Purchase.created_at.desc())
            .all()
        )

    @staticmethod
    def instructor_sales(instructor_id):
        rows = (
            db.session.query(
                Course.id,
                Course.title,
                func.count(Purchase.id),
                func.coalesce(func.sum(Purchase.amount), 0),
            )
            .join(Purchase, Purchase.course_id == Course.id)
            .filter(Course.creator_id == instructor_id, Purchase.status == COMPLETED)
            .group_by(Course.id, Course.title)
            .order_by(Course.id)
            .all()
        )

        sales = [
            {
                "course_id": course_id,
                "course_title": title,
                "sales_count": count,
                "revenue": float(revenue),
            }
            for course_id, title, count, revenue in rows
        ]
        return {
            "total_sales": sum(item["sales_count"] for item in sales),
            "total_revenue": sum(item["revenue"] for item in sales),
            "sales": sales,
        }
