import logging

from flask import Blueprint, jsonify, g, request

from models import db
from models.courses import Course
from classes.learning_manager import LearningManager, STATUS_FILTERS
from classes.purchase_manager import PurchaseManager
from classes.validators import ValidationError, require_fields, validate_choice
from utils import payment_service
from utils.helpers import error_response, get_json_body
from utils.utils import login_required, instructor_required

logger = logging.getLogger(__name__)

purchase_bp = Blueprint("purchase", __name__)


@purchase_bp.route("/checkout/create-checkout-session", methods=["POST"])
@login_required
def create_checkout_session():
    data = get_json_body()
    require_fields(data, "course_id")

    try:
        course_id = int(data["course_id"])
    except (TypeError, ValueError):
        raise ValidationError({"course_id": "course_id must be an integer."})

    url = PurchaseManager.create_checkout(g.user.get("user_id"), course_id)
    return jsonify({"success": True, "url": url}), 200


# Registered without login; authenticated by the provider signature over the raw body
@purchase_bp.route("/webhook", methods=["POST"])
def payment_webhook():
    payload = request.get_data()
    signature = request.headers.get("Stripe-Signature")

    try:
        event = payment_service.verify_webhook(payload, signature)
    except payment_service.WebhookVerificationError as e:
        logger.warning("Rejected webhook: %s", e)
        return error_response(f"Webhook error: {e}", 400)

    completed = PurchaseManager.handle_webhook_event(event)
    return jsonify({"success": True, "received": True, "completed": completed}), 200


@purchase_bp.route("/courses/<int:course_id>/detail-with-status", methods=["GET"])
@login_required
def get_course_detail_with_status(course_id):
    user_id = g.user.get("user_id")
    course = db.session.get(Course, course_id)
    if not course or (not course.is_published and course.creator_id != user_id):
        return error_response("Course not found", 404)

    purchased = PurchaseManager.get_completed_purchase(user_id, course.id) is not None
    return jsonify({
        "success": True,
        "course": course.to_dict(include_lectures=True),
        "purchased": purchased,
        "can_access": PurchaseManager.has_access(user_id, course),
    }), 200


@purchase_bp.route("/", methods=["GET"])
@login_required
def get_purchased_courses():
    return jsonify({
        "success": True,
        "purchased_courses": LearningManager.purchased_courses(g.user.get("user_id")),
    }), 200


@purchase_bp.route("/pending", methods=["GET"])
@login_required
def get_pending_purchases():
    return jsonify({
        "success": True,
        "pending_purchases": LearningManager.pending_courses(g.user.get("user_id")),
    }), 200


@purchase_bp.route("/learning", methods=["GET"])
@login_required
def get_my_learning():
    status = request.args.get("status")
    if status:
        validate_choice("status", status, STATUS_FILTERS)

    courses = LearningManager.my_learning(
        g.user.get("user_id"),
        status=status,
        query=request.args.get("q"),
        level=request.args.get("level"),
    )
    return jsonify({"success": True, "courses": courses}), 200


@purchase_bp.route("/instructor/sales", methods=["GET"])
@login_required
@instructor_required
def get_instructor_sales():
    return jsonify({"success": True, **PurchaseManager.instructor_sales(g.user.get("user_id"))}), 200
