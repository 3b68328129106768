from flask import Blueprint, jsonify, g

from models import db
from models.courses import Course
from classes.progress_manager import ProgressManager
from utils.helpers import error_response
from utils.utils import login_required

progress_bp = Blueprint("progress", __name__)


def _load_course(course_id):
    return db.session.get(Course, course_id)


@progress_bp.route("/<int:course_id>", methods=["GET"])
@login_required
def get_course_progress(course_id):
    course = _load_course(course_id)
    if not course:
        return error_response("Course not found", 404)

    data = ProgressManager.get_progress(g.user.get("user_id"), course)
    return jsonify({"success": True, "data": data}), 200

# Mark a lecture as viewed
@progress_bp.route("/<int:course_id>/lecture/<int:lecture_id>/view", methods=["POST"])
@login_required
def mark_lecture_viewed(course_id, lecture_id):
    course = _load_course(course_id)
    if not course:
        return error_response("Course not found", 404)

    data = ProgressManager.mark_lecture_viewed(g.user.get("user_id"), course, lecture_id)
    return jsonify({"success": True, "message": "Lecture progress updated.", "data": data}), 200


@progress_bp.route("/<int:course_id>/complete", methods=["POST"])
@login_required
def mark_as_completed(course_id):
    course = _load_course(course_id)
    if not course:
        return error_response("Course not found", 404)

    data = ProgressManager.set_completed(g.user.get("user_id"), course, True)
    return jsonify({"success": True, "message": "Course marked as completed.", "data": data}), 200


@progress_bp.route("/<int:course_id>/incomplete", methods=["POST"])
@login_required
def mark_as_incomplete(course_id):
    course = _load_course(course_id)
    if not course:
        return error_response("Course not found", 404)

    data = ProgressManager.set_completed(g.user.get("user_id"), course, False)
    return jsonify({"success": True, "message": "Course marked as incomplete.", "data": data}), 200

# Retake: clear viewed lectures and the completed flag
@progress_bp.route("/<int:course_id>", methods=["DELETE"])
@login_required
def reset_course_progress(course_id):
    course = _load_course(course_id)
    if not course:
        return error_response("Course not found", 404)

    data = ProgressManager.reset_progress(g.user.get("user_id"), course)
    return jsonify({"success": True, "message": "Course progress reset.", "data": data}), 200
