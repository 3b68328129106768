import logging

from flask import Blueprint, jsonify, g, request
from sqlalchemy import or_
from werkzeug.exceptions import Forbidden, NotFound

from models import db
from models.courses import Course, LEVELS
from models.course_lectures import Lecture
from models.purchases import Purchase, PENDING, COMPLETED
from classes.progress_manager import ProgressManager
from classes.validators import (
    ValidationError, require_fields, validate_choice, validate_length, validate_price,
    validate_string, parse_bool,
)
from utils.helpers import error_response, get_json_body, sanitize_html
from utils.utils import login_required, instructor_required

logger = logging.getLogger(__name__)

course_bp = Blueprint("course", __name__)


def get_owned_course(course_id):
    """Course owned by the logged-in instructor, or raise 404/403."""
    course = db.session.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")
    if course.creator_id != g.user.get("user_id"):
        raise Forbidden("You do not have permission to modify this course")
    return course

#__________________________________________________________________________________________ * Courses *__________________________________________________

# create a draft course
@course_bp.route("/", methods=["POST"])
@login_required
@instructor_required
def create_course():
    data = get_json_body()
    require_fields(data, "title", "category")
    validate_length("title", data["title"], 255)
    validate_length("category", data["category"], 100)

    course = Course(title=data["title"], category=data["category"], creator_id=g.user.get("user_id"))
    db.session.add(course)
    db.session.commit()
    logger.info("Course %s created by %s", course.id, course.creator_id)

    return jsonify({"success": True, "message": "Course created.", "course": course.to_dict()}), 201

# fetch the instructor's own courses
@course_bp.route("/", methods=["GET"])
@login_required
@instructor_required
def get_creator_courses():
    courses = Course.query.filter_by(creator_id=g.user.get("user_id")).order_by(Course.created_at.desc()).all()
    return jsonify({"success": True, "courses": [course.to_dict() for course in courses]}), 200


@course_bp.route("/published", methods=["GET"])
def get_published_courses():
    courses = Course.query.filter_by(is_published=True).order_by(Course.created_at.desc()).all()
    return jsonify({"success": True, "courses": [course.to_dict() for course in courses]}), 200


@course_bp.route("/search", methods=["GET"])
def search_courses():
    query = (request.args.get("query") or "").strip()
    sort_by_price = request.args.get("sort_by_price", "")

    categories = []
    for value in request.args.getlist("categories"):
        categories.extend(c.strip() for c in value.split(",") if c.strip())

    search = Course.query.filter(Course.is_published.is_(True))
    if query:
        pattern = f"%{query}%"
        search = search.filter(or_(
            Course.title.ilike(pattern),
            Course.subtitle.ilike(pattern),
            Course.category.ilike(pattern),
        ))
    if categories:
        search = search.filter(Course.category.in_(categories))

    if sort_by_price == "low":
        search = search.order_by(Course.price.asc())
    elif sort_by_price == "high":
        search = search.order_by(Course.price.desc())
    else:
        search = search.order_by(Course.created_at.desc())

    return jsonify({"success": True, "courses": [course.to_dict() for course in search.all()]}), 200

# Fetch course details
@course_bp.route("/<int:course_id>", methods=["GET"])
@login_required
def get_course(course_id):
    course = db.session.get(Course, course_id)
    if not course or (not course.is_published and course.creator_id != g.user.get("user_id")):
        return error_response("Course not found", 404)

    return jsonify({"success": True, "course": course.to_dict(include_lectures=True)}), 200

# Edit course
@course_bp.route("/<int:course_id>", methods=["PUT"])
@login_required
@instructor_required
def edit_course(course_id):
    course = get_owned_course(course_id)
    data = get_json_body()

    if "title" in data:
        if not data["title"]:
            raise ValidationError({"title": "title cannot be empty."})
        validate_length("title", data["title"], 255)
        course.title = data["title"]
    if "subtitle" in data:
        validate_length("subtitle", data["subtitle"], 255)
        course.subtitle = data["subtitle"]
    if "description" in data:
        validate_string("description", data["description"])
        course.description = sanitize_html(data["description"])
    if "category" in data:
        if not data["category"]:
            raise ValidationError({"category": "category cannot be empty."})
        validate_length("category", data["category"], 100)
        course.category = data["category"]
    if "level" in data:
        validate_choice("level", data["level"], LEVELS)
        course.level = data["level"]
    if "price" in data:
        course.price = validate_price(data["price"])
    if "thumbnail_url" in data:
        validate_length("thumbnail_url", data["thumbnail_url"], 255)
        course.thumbnail_url = data["thumbnail_url"]

    db.session.commit()

    return jsonify({"success": True, "message": "Course updated successfully.", "course": course.to_dict()}), 200

# Publish / unpublish
@course_bp.route("/<int:course_id>", methods=["PATCH"])
@login_required
@instructor_required
def toggle_publish(course_id):
    course = get_owned_course(course_id)
    publish = parse_bool("publish", request.args.get("publish"))

    course.is_published = publish
    db.session.commit()

    state = "published" if publish else "unpublished"
    return jsonify({"success": True, "message": f"Course is {state}", "course": course.to_dict()}), 200

# Delete a course
@course_bp.route("/<int:course_id>", methods=["DELETE"])
@login_required
@instructor_required
def delete_course(course_id):
    course = get_owned_course(course_id)

    if Purchase.query.filter_by(course_id=course.id, status=COMPLETED).first():
        return error_response("Course has completed purchases and cannot be deleted", 409)

    Purchase.query.filter_by(course_id=course.id, status=PENDING).delete(synchronize_session=False)
    for lecture in course.lectures:
        ProgressManager.forget_lecture(lecture.id)
    db.session.delete(course)
    db.session.commit()

    return jsonify({"success": True, "message": "Course deleted successfully"}), 200

#__________________________________________________________________________________________ * Lectures *__________________________________________________

@course_bp.route("/<int:course_id>/lectures", methods=["POST"])
@login_required
@instructor_required
def create_lecture(course_id):
    course = get_owned_course(course_id)
    data = get_json_body()
    require_fields(data, "title")
    validate_length("title", data["title"], 255)

    lecture = Lecture(
        course_id=course.id,
        title=data["title"],
        position=Lecture.get_next_position(course.id),
    )
    db.session.add(lecture)
    db.session.commit()

    return jsonify({"success": True, "message": "Lecture created successfully.", "lecture": lecture.to_dict()}), 201


@course_bp.route("/<int:course_id>/lectures", methods=["GET"])
@login_required
@instructor_required
def get_course_lectures(course_id):
    course = get_owned_course(course_id)
    return jsonify({"success": True, "lectures": [lecture.to_dict() for lecture in course.lectures]}), 200

# Edit lecture
@course_bp.route("/<int:course_id>/lectures/<int:lecture_id>", methods=["PUT"])
@login_required
@instructor_required
def edit_lecture(course_id, lecture_id):
    course = get_owned_course(course_id)
    lecture = Lecture.query.filter_by(id=lecture_id, course_id=course.id).first()
    if not lecture:
        return error_response("Lecture not found", 404)

    data = get_json_body()
    if data.get("title"):
        validate_length("title", data["title"], 255)
        lecture.title = data["title"]
    if "video_url" in data:
        validate_length("video_url", data["video_url"], 255)
        lecture.video_url = data["video_url"]
    if "is_preview_free" in data:
        lecture.is_preview_free = parse_bool("is_preview_free", data["is_preview_free"])

    db.session.commit()

    return jsonify({"success": True, "message": "Lecture updated successfully.", "lecture": lecture.to_dict()}), 200

# Delete a lecture
@course_bp.route("/<int:course_id>/lectures/<int:lecture_id>", methods=["DELETE"])
@login_required
@instructor_required
def delete_lecture(course_id, lecture_id):
    course = get_owned_course(course_id)
    lecture = Lecture.query.filter_by(id=lecture_id, course_id=course.id).first()
    if not lecture:
        return error_response("Lecture not found", 404)

    ProgressManager.forget_lecture(lecture.id)
    db.session.delete(lecture)
    db.session.commit()

    return jsonify({"success": True, "message": "Lecture removed successfully."}), 200


@course_bp.route("/lectures/<int:lecture_id>", methods=["GET"])
@login_required
def get_lecture(lecture_id):
    lecture = db.session.get(Lecture, lecture_id)
    if not lecture:
        return error_response("Lecture not found", 404)

    course = lecture.course
    if course.creator_id != g.user.get("user_id") and not course.is_published:
        return error_response("Lecture not found", 404)

    return jsonify({"success": True, "lecture": lecture.to_dict()}), 200
