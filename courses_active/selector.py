"""
Picks the courses shown in the active courses block.

Active courses (completion tracking started, not completed) come first and
alone; only when there are none does the selector fall back to the other
courses the user is currently enrolled in and allowed to see.
"""
import logging

from .models.user import is_real_user
from .utils.query_options import DEFAULT_SORT, normalize_fields, parse_sort, validate_limit

logger = logging.getLogger(__name__)


class CourseSelector:
    def __init__(self, data_source):
        self.data_source = data_source

    def get_active_or_other_courses(self, user, fields=None, sort=DEFAULT_SORT, limit=0,
                                    login_as_course_id=None):
        """Return the user's active courses, or their other accessible courses if none are active.

        The active bucket is always ordered by shortname and never limited;
        fields, sort and limit only shape the fallback bucket.
        """
        # Guest account does not have any courses.
        if not is_real_user(user):
            return []

        # Reject bad options even when the fallback bucket is not needed
        fields = normalize_fields(fields)
        sort = parse_sort(sort)
        limit = validate_limit(limit)

        courses = {}
        for course in self.fetch_active_courses(user):
            courses.setdefault(course.id, course)

        if not courses:
            for course in self.fetch_other_accessible_courses(user, fields, sort, limit,
                                                              login_as_course_id):
                courses.setdefault(course.id, course)

        logger.info(f"Selected {len(courses)} courses for user {user.id}")
        return list(courses.values())

    def fetch_active_courses(self, user):
        if not is_real_user(user):
            return []

        courses = self.data_source.query_active_courses(user.id)
        for course in courses:
            self.data_source.preload_context(course)
        return courses

    def fetch_other_accessible_courses(self, user, fields=None, sort=DEFAULT_SORT, limit=0,
                                       login_as_course_id=None):
        if not is_real_user(user):
            return []

        fields = normalize_fields(fields)
        sort = parse_sort(sort)
        limit = validate_limit(limit)

        # Courses touched by completion tracking (active, inactive or completed)
        excluded = self.data_source.query_completion_course_ids(user.id)

        courses = self.data_source.query_enrolled_courses(
            user.id, excluded, fields, sort, limit, login_as_course_id=login_as_course_id)

        accessible = []
        for course in courses:
            self.data_source.preload_context(course)
            if not course.visible and not self.data_source.resolve_visibility(course.id, user.id):
                continue
            accessible.append(course)
        return accessible
