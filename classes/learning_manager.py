from classes.progress_manager import ProgressManager
from classes.purchase_manager import PurchaseManager

STATUS_FILTERS = ("in_progress", "completed", "pending")

# alias -> stored level, lowercased
LEVEL_ALIASES = {
    "easy": "beginner",
    "medium": "intermediate",
    "hard": "advanced",
}


class LearningManager:
    """Reconciles completed and pending purchases into a single learning list."""

    @staticmethod
    def purchased_entry(purchase):
        """The completed flag decides the entry's state, so a manual "incomplete" keeps it in progress."""
        course = purchase.course
        progress = ProgressManager.get_record(purchase.user_id, course.id)
        summary = ProgressManager.summarize(course, progress)
        return {
            "purchase": purchase.to_dict(),
            "course": course.to_dict(),
            "is_pending": False,
            "progress": summary["percentage"],
            "completed_lectures": summary["viewed_count"],
            "total_lectures": summary["total_lectures"],
            "completed": summary["completed"],
        }

    @staticmethod
    def pending_entry(purchase):
        return {
            "purchase": purchase.to_dict(),
            "course": purchase.course.to_dict(),
            "is_pending": True,
            "progress": 0,
            "completed_lectures": 0,
            "total_lectures": len(purchase.course.lectures),
            "completed": False,
        }

    @staticmethod
    def purchased_courses(user_id):
        return [LearningManager.purchased_entry(p) for p in PurchaseManager.completed_purchases(user_id)]

    @staticmethod
    def pending_courses(user_id):
        return [LearningManager.pending_entry(p) for p in PurchaseManager.pending_purchases(user_id)]

    @staticmethod
    def my_learning(user_id, status=None, query=None, level=None):
        entries = LearningManager.purchased_courses(user_id) + LearningManager.pending_courses(user_id)

        if query:
            needle = query.lower()
            entries = [
                entry for entry in entries
                if any(needle in (entry["course"].get(field) or "").lower()
                       for field in ("title", "subtitle", "description"))
            ]

        if level:
            wanted = LEVEL_ALIASES.get(level.lower(), level.lower())
            entries = [entry for entry in entries if (entry["course"].get("level") or "").lower() == wanted]

        if status == "in_progress":
            entries = [entry for entry in entries if not entry["is_pending"] and not entry["completed"]]
        elif status == "completed":
            entries = [entry for entry in entries if not entry["is_pending"] and entry["completed"]]
        elif status == "pending":
            entries = [entry for entry in entries if entry["is_pending"]]

        return entries
