"""
Read-only access to courses, enrolments and completion records.

CourseDataSource is the contract the course selector depends on;
SQLAlchemyCourseDataSource answers it from the Flask-SQLAlchemy models.
Database errors are not caught here.
"""
import logging
import time
from abc import ABC, abstractmethod

from sqlalchemy import and_, or_, select

from .. import db
from ..models.completion import CourseCompletion
from ..models.course import Course
from ..models.enrollment import (
    ENROL_INSTANCE_ENABLED,
    ENROL_USER_ACTIVE,
    EnrolMethod,
    UserEnrolment,
)
from ..models.summary import CourseSummary
from ..models.user import VIEW_HIDDEN_COURSES, CapabilityGrant
from .query_options import BASE_FIELDS, expand_fields

logger = logging.getLogger(__name__)


class CourseDataSource(ABC):
    """What the course selector needs from the platform"""

    @abstractmethod
    def query_active_courses(self, user_id):
        """Courses the user started but has not completed, by shortname"""

    @abstractmethod
    def query_completion_course_ids(self, user_id):
        """Ids of every course holding a completion record for the user"""

    @abstractmethod
    def query_enrolled_courses(self, user_id, exclude_ids, fields, sort, limit,
                               login_as_course_id=None):
        """Courses the user is currently enrolled in, minus exclude_ids and the site course"""

    @abstractmethod
    def resolve_visibility(self, course_id, user_id):
        """True if the course is visible or the user may view hidden courses there"""

    def preload_context(self, course):
        """Hint that course will be checked soon; implementations may cache it"""


def rounded_now(clock=time.time):
    """Current time rounded to 100 seconds so repeated queries hit the same cache"""
    return int(round(clock(), -2))


class SQLAlchemyCourseDataSource(CourseDataSource):
    def __init__(self, site_course_id=1, session=None, clock=time.time):
        self.site_course_id = site_course_id
        self.session = session if session is not None else db.session
        self.clock = clock
        self._contexts = {}
        self._capabilities = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def query_active_courses(self, user_id):
        columns = [getattr(Course, name) for name in BASE_FIELDS]
        stmt = (
            select(*columns)
            .join(CourseCompletion, CourseCompletion.course == Course.id)
            .where(
                CourseCompletion.timeenrolled > 0,
                CourseCompletion.timestarted > 0,
                CourseCompletion.timecompleted.is_(None),
                CourseCompletion.userid == user_id,
            )
            .order_by(Course.shortname.asc(), Course.id.asc())
        )
        rows = self.session.execute(stmt).mappings().all()
        logger.debug(f"User {user_id} has {len(rows)} active courses")
        return [CourseSummary.from_row(row) for row in rows]

    def query_completion_course_ids(self, user_id):
        stmt = (
            select(CourseCompletion.course)
            .where(CourseCompletion.timeenrolled > 0, CourseCompletion.userid == user_id)
            .order_by(CourseCompletion.course)
        )
        return set(self.session.execute(stmt).scalars().all())

    def query_enrolled_courses(self, user_id, exclude_ids, fields, sort, limit,
                               login_as_course_id=None):
        now = rounded_now(self.clock)

        enrolled = (
            select(EnrolMethod.courseid)
            .join(UserEnrolment, and_(UserEnrolment.enrolid == EnrolMethod.id,
                                      UserEnrolment.userid == user_id))
            .where(
                UserEnrolment.status == ENROL_USER_ACTIVE,
                EnrolMethod.status == ENROL_INSTANCE_ENABLED,
                UserEnrolment.timestart <= now,
                or_(UserEnrolment.timeend == 0, UserEnrolment.timeend > now),
            )
            .distinct()
            .subquery()
        )

        columns = [getattr(Course, name) for name in expand_fields(fields)]
        stmt = (
            select(*columns)
            .join(enrolled, enrolled.c.courseid == Course.id)
            .where(Course.id != self.site_course_id)
        )
        if exclude_ids:
            stmt = stmt.where(Course.id.not_in(sorted(exclude_ids)))
        if login_as_course_id is not None:
            # List only this course
            stmt = stmt.where(Course.id == login_as_course_id)

        order = [getattr(Course, name).desc() if direction == 'DESC' else getattr(Course, name).asc()
                 for name, direction in sort]
        order.append(Course.id.asc())
        stmt = stmt.order_by(*order)
        if limit:
            stmt = stmt.limit(limit)

        rows = self.session.execute(stmt).mappings().all()
        logger.debug(f"User {user_id} has {len(rows)} other enrolled courses")
        return [CourseSummary.from_row(row) for row in rows]

    # ------------------------------------------------------------------
    # Contexts and capabilities
    # ------------------------------------------------------------------
    def preload_context(self, course):
        self._contexts[course.id] = course

    def _get_course(self, course_id):
        if course_id not in self._contexts:
            course = self.session.get(Course, course_id)
            if course is None:
                return None
            self._contexts[course_id] = CourseSummary.from_row(
                {name: getattr(course, name) for name in BASE_FIELDS})
        return self._contexts[course_id]

    def _grants_for(self, user_id):
        if user_id not in self._capabilities:
            stmt = select(CapabilityGrant.capability, CapabilityGrant.courseid).where(
                CapabilityGrant.userid == user_id)
            self._capabilities[user_id] = set(self.session.execute(stmt).tuples().all())
        return self._capabilities[user_id]

    def has_capability(self, capability, course_id, user_id):
        grants = self._grants_for(user_id)
        return (capability, course_id) in grants or (capability, None) in grants

    def resolve_visibility(self, course_id, user_id):
        course = self._get_course(course_id)
        if course is None:
            logger.warning(f"No context for course {course_id}")
            return False
        if course.visible:
            return True
        return self.has_capability(VIEW_HIDDEN_COURSES, course_id, user_id)
