import logging

from werkzeug.exceptions import Forbidden, NotFound

from models import db
from models.course_lectures import Lecture
from models.course_progress import CourseProgress, LectureProgress
from classes.purchase_manager import PurchaseManager

logger = logging.getLogger(__name__)


class ProgressManager:
    @staticmethod
    def calculate_percentage(viewed_count, total_lectures):
        """Whole-number percentage, rounded half up, clamped to [0, 100]."""
        if total_lectures <= 0:
            return 0
        viewed_count = max(0, min(viewed_count, total_lectures))
        return (200 * viewed_count + total_lectures) // (2 * total_lectures)

    @staticmethod
    def get_record(user_id, course_id):
        return CourseProgress.query.filter_by(user_id=user_id, course_id=course_id).first()

    @staticmethod
    def _get_or_create_record(user_id, course_id):
        progress = ProgressManager.get_record(user_id, course_id)
        if not progress:
            progress = CourseProgress(user_id=user_id, course_id=course_id, completed=False)
            db.session.add(progress)
        return progress

    @staticmethod
    def _ensure_access(user_id, course):
        if not PurchaseManager.has_access(user_id, course):
            logger.info("Progress access denied for user %s on course %s", user_id, course.id)
            raise Forbidden("Purchase this course to access its progress")

    @staticmethod
    def summarize(course, progress):
        """Viewed set restricted to the course's current lectures, with counts and percentage."""
        lecture_ids = [lecture.id for lecture in course.lectures]
        viewed = progress.viewed_lecture_ids if progress else set()
        viewed_ids = [lecture_id for lecture_id in lecture_ids if lecture_id in viewed]

        return {
            "course_id": course.id,
            "viewed_lecture_ids": viewed_ids,
            "viewed_count": len(viewed_ids),
            "total_lectures": len(lecture_ids),
            "percentage": ProgressManager.calculate_percentage(len(viewed_ids), len(lecture_ids)),
            "completed": bool(progress.completed) if progress else False,
        }

    @staticmethod
    def get_progress(user_id, course):
        ProgressManager._ensure_access(user_id, course)
        progress = ProgressManager.get_record(user_id, course.id)
        return {
            "course_details": course.to_dict(include_lectures=True),
            **ProgressManager.summarize(course, progress),
        }

    @staticmethod
    def mark_lecture_viewed(user_id, course, lecture_id):
        ProgressManager._ensure_access(user_id, course)

        lecture = Lecture.query.filter_by(id=lecture_id, course_id=course.id).first()
        if not lecture:
            raise NotFound("Lecture not found in this course")

        progress = ProgressManager._get_or_create_record(user_id, course.id)
        if lecture.id not in progress.viewed_lecture_ids:
            progress.lectures.append(LectureProgress(lecture_id=lecture.id))

        summary = ProgressManager.summarize(course, progress)
        if summary["viewed_count"] == summary["total_lectures"]:
            progress.completed = True
            summary["completed"] = True

        db.session.commit()
        return summary

    @staticmethod
    def set_completed(user_id, course, completed):
        """Manual override of the completed flag; the viewed set is left alone."""
        ProgressManager._ensure_access(user_id, course)

        progress = ProgressManager._get_or_create_record(user_id, course.id)
        progress.completed = bool(completed)
        db.session.commit()
        return ProgressManager.summarize(course, progress)

    @staticmethod
    def reset_progress(user_id, course):
        ProgressManager._ensure_access(user_id, course)

        progress = ProgressManager.get_record(user_id, course.id)
        if progress:
            progress.lectures.clear()
            progress.completed = False
            db.session.commit()
        return ProgressManager.summarize(course, progress)

    @staticmethod
    def forget_lecture(lecture_id):
        """Drop a deleted lecture from every viewed set."""
        LectureProgress.query.filter_by(lecture_id=lecture_id).delete(synchronize_session=False)
