import pytest
from werkzeug.exceptions import Forbidden, NotFound

from models import db
from models.courses import Course
from classes.progress_manager import ProgressManager
from tests.conftest import make_course, make_purchase, make_user


def _course(course_id):
    return db.session.get(Course, course_id)


@pytest.mark.parametrize("viewed, total, expected", [
    (0, 4, 0),
    (3, 4, 75),
    (4, 4, 100),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (0, 0, 0),
    (5, 4, 100),
    (-1, 4, 0),
])
def test_calculate_percentage(viewed, total, expected):
    assert ProgressManager.calculate_percentage(viewed, total) == expected


def test_four_lecture_course_progress(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        for lecture_id in lecture_ids[:3]:
            summary = ProgressManager.mark_lecture_viewed(student_id, course, lecture_id)
        assert summary["percentage"] == 75
        assert summary["completed"] is False

        summary = ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[3])
        assert summary["percentage"] == 100
        assert summary["completed"] is True
        assert summary["viewed_lecture_ids"] == lecture_ids


def test_marking_twice_keeps_viewed_set_size(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        first = ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[0])
        second = ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[0])

        assert first["viewed_count"] == second["viewed_count"] == 1
        record = ProgressManager.get_record(student_id, course_id)
        assert len(record.lectures) == 1


def test_completion_does_not_flip_early(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        for count, lecture_id in enumerate(lecture_ids, start=1):
            summary = ProgressManager.mark_lecture_viewed(student_id, course, lecture_id)
            assert summary["completed"] is (count == len(lecture_ids))


def test_set_completed_leaves_viewed_set_alone(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[0])

        summary = ProgressManager.set_completed(student_id, course, True)
        assert summary["completed"] is True
        assert summary["viewed_count"] == 1
        assert summary["percentage"] == 25

        summary = ProgressManager.set_completed(student_id, course, False)
        assert summary["completed"] is False
        assert summary["viewed_count"] == 1


def test_set_incomplete_after_full_coverage(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        for lecture_id in lecture_ids:
            ProgressManager.mark_lecture_viewed(student_id, course, lecture_id)

        summary = ProgressManager.set_completed(student_id, course, False)
        assert summary["completed"] is False
        assert summary["percentage"] == 100


def test_reset_progress_clears_everything(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        for lecture_id in lecture_ids:
            ProgressManager.mark_lecture_viewed(student_id, course, lecture_id)

        summary = ProgressManager.reset_progress(student_id, course)
        assert summary["viewed_count"] == 0
        assert summary["percentage"] == 0
        assert summary["completed"] is False


def test_get_progress_without_record_is_empty(app, student_id, paid_course):
    course_id, _ = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        data = ProgressManager.get_progress(student_id, _course(course_id))
        assert data["viewed_lecture_ids"] == []
        assert data["percentage"] == 0
        assert data["completed"] is False
        assert len(data["course_details"]["lectures"]) == 4
        assert ProgressManager.get_record(student_id, course_id) is None


def test_paid_course_denied_without_purchase(app, student_id, paid_course):
    course_id, lecture_ids = paid_course

    with app.app_context():
        course = _course(course_id)
        with pytest.raises(Forbidden):
            ProgressManager.get_progress(student_id, course)
        with pytest.raises(Forbidden):
            ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[0])


def test_pending_purchase_does_not_grant_access(app, student_id, paid_course):
    course_id, _ = paid_course
    make_purchase(app, student_id, course_id, status="pending", payment_id="cs_pending")

    with app.app_context():
        with pytest.raises(Forbidden):
            ProgressManager.get_progress(student_id, _course(course_id))


def test_creator_and_free_course_access(app, instructor_id, student_id, paid_course):
    course_id, lecture_ids = paid_course
    free_course_id, free_lectures = make_course(app, instructor_id, title="Free intro", price=None, lecture_count=2)

    with app.app_context():
        summary = ProgressManager.mark_lecture_viewed(instructor_id, _course(course_id), lecture_ids[0])
        assert summary["viewed_count"] == 1

        summary = ProgressManager.mark_lecture_viewed(student_id, _course(free_course_id), free_lectures[0])
        assert summary["percentage"] == 50


def test_lecture_from_another_course_is_rejected(app, instructor_id, student_id, paid_course):
    course_id, _ = paid_course
    _, other_lectures = make_course(app, instructor_id, title="Other", lecture_count=1)
    make_purchase(app, student_id, course_id)

    with app.app_context():
        with pytest.raises(NotFound):
            ProgressManager.mark_lecture_viewed(student_id, _course(course_id), other_lectures[0])
        assert ProgressManager.get_record(student_id, course_id) is None


def test_forgotten_lecture_leaves_the_viewed_set(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    make_purchase(app, student_id, course_id)

    with app.app_context():
        course = _course(course_id)
        ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[0])
        ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[1])

        ProgressManager.forget_lecture(lecture_ids[0])
        db.session.commit()
        db.session.expire_all()

        summary = ProgressManager.summarize(_course(course_id), ProgressManager.get_record(student_id, course_id))
        assert summary["viewed_lecture_ids"] == [lecture_ids[1]]
        assert summary["percentage"] == 25


def test_viewed_set_is_per_user(app, student_id, paid_course):
    course_id, lecture_ids = paid_course
    other_id = make_user(app, "other")
    make_purchase(app, student_id, course_id)
    make_purchase(app, other_id, course_id)

    with app.app_context():
        course = _course(course_id)
        ProgressManager.mark_lecture_viewed(student_id, course, lecture_ids[0])
        assert ProgressManager.get_progress(other_id, course)["viewed_count"] == 0
