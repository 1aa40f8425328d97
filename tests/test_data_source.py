"""
tests/test_data_source.py

Tests for courses_active/utils/data_source.py and the selector wired to it.
Each test builds a fresh application on an in-memory SQLite database.
"""

import sys
import time
import unittest
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap: repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from courses_active import create_app, db                                   # noqa: E402
from courses_active.config import TestConfig                                # noqa: E402
from courses_active.models.course import Course                             # noqa: E402
from courses_active.models.enrollment import (                               # noqa: E402
    ENROL_INSTANCE_DISABLED,
    ENROL_USER_SUSPENDED,
)
from courses_active.selector import CourseSelector                          # noqa: E402
from courses_active.utils.data_source import (                              # noqa: E402
    SQLAlchemyCourseDataSource,
    rounded_now,
)
from courses_active.utils.query_options import BASE_FIELDS, normalize_fields, parse_sort  # noqa: E402
from factories import (                                                      # noqa: E402
    DAY,
    enrol,
    grant_view_hidden,
    make_course,
    make_site_course,
    make_user,
    track_completion,
)


def ids(courses):
    return [c.id for c in courses]


class DatabaseTestCase(unittest.TestCase):

    def setUp(self):
        self.app = create_app(TestConfig)
        self.ctx = self.app.app_context()
        self.ctx.push()
        make_site_course(1)
        self.user = make_user('u1')
        self.source = SQLAlchemyCourseDataSource(site_course_id=1)
        self.selector = CourseSelector(self.source)

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()


class TestActiveCoursesQuery(DatabaseTestCase):

    def test_only_started_and_incomplete_courses_are_active(self):
        started = make_course(10, 'B-started')
        completed = make_course(11, 'A-completed')
        not_started = make_course(12, 'C-not-started')
        track_completion(self.user, started)
        track_completion(self.user, completed, timecompleted=200)
        track_completion(self.user, not_started, timestarted=0)

        self.assertEqual(ids(self.source.query_active_courses(self.user.id)), [10])

    def test_active_courses_sorted_by_shortname(self):
        for course_id, shortname in ((20, 'zoology'), (21, 'algebra'), (22, 'music')):
            track_completion(self.user, make_course(course_id, shortname))

        courses = self.source.query_active_courses(self.user.id)
        self.assertEqual([c.shortname for c in courses], ['algebra', 'music', 'zoology'])
        self.assertEqual(set(courses[0].to_dict()), set(BASE_FIELDS))

    def test_other_users_records_are_ignored(self):
        other = make_user('u2')
        track_completion(other, make_course(30, 'other'))

        self.assertEqual(self.source.query_active_courses(self.user.id), [])

    def test_exclusion_set_covers_every_tracked_course(self):
        track_completion(self.user, make_course(40, 'a'))
        track_completion(self.user, make_course(41, 'b'), timestarted=0)
        track_completion(self.user, make_course(42, 'c'), timecompleted=500)
        track_completion(self.user, make_course(43, 'd'), timeenrolled=0)

        self.assertEqual(self.source.query_completion_course_ids(self.user.id), {40, 41, 42})


class TestEnrolledCoursesQuery(DatabaseTestCase):

    def query(self, exclude_ids=(), fields=None, sort='visible DESC, fullname ASC', limit=0,
              login_as_course_id=None):
        return self.source.query_enrolled_courses(
            self.user.id, set(exclude_ids), normalize_fields(fields), parse_sort(sort), limit,
            login_as_course_id=login_as_course_id)

    def test_enrolment_window_and_status_filters(self):
        now = int(time.time())
        enrol(self.user, make_course(50, 'current'))
        enrol(self.user, make_course(51, 'open-ended'), timestart=0)
        enrol(self.user, make_course(52, 'future'), timestart=now + 10 * DAY)
        enrol(self.user, make_course(53, 'expired'), timestart=now - 10 * DAY, timeend=now - DAY)
        enrol(self.user, make_course(54, 'bounded'), timeend=now + 10 * DAY)
        enrol(self.user, make_course(55, 'suspended'), status=ENROL_USER_SUSPENDED)
        enrol(self.user, make_course(56, 'disabled'), instance_status=ENROL_INSTANCE_DISABLED)

        self.assertEqual(sorted(ids(self.query())), [50, 51, 54])

    def test_site_course_and_excluded_ids_are_dropped(self):
        enrol(self.user, db.session.get(Course, 1))
        enrol(self.user, make_course(60, 'x'))
        enrol(self.user, make_course(61, 'y'))

        self.assertEqual(ids(self.query(exclude_ids={61})), [60])

    def test_course_listed_once_for_several_enrolments(self):
        course = make_course(70, 'twice')
        enrol(self.user, course)
        enrol(self.user, course)

        self.assertEqual(ids(self.query()), [70])

    def test_sort_limit_and_tie_break(self):
        enrol(self.user, make_course(83, 'c', fullname='Same name'))
        enrol(self.user, make_course(81, 'a', fullname='Same name'))
        enrol(self.user, make_course(82, 'b', fullname='Another', visible=False))
        enrol(self.user, make_course(84, 'd', fullname='Zeta'))

        self.assertEqual(ids(self.query()), [81, 83, 84, 82])
        self.assertEqual(ids(self.query(sort=[('fullname', 'DESC')])), [84, 81, 83, 82])
        self.assertEqual(ids(self.query(limit=2)), [81, 83])

    def test_field_projection(self):
        enrol(self.user, make_course(90, 'proj', summary='About', lang='fr'))

        base = self.query()[0]
        self.assertEqual(dict(base.extra), {})

        extra = self.query(fields='summary')[0]
        self.assertEqual(extra.get('summary'), 'About')
        self.assertNotIn('lang', extra.extra)

        everything = self.query(fields='*')[0]
        self.assertEqual(everything.get('lang'), 'fr')
        self.assertIn('timemodified', everything.to_dict())

    def test_login_as_restricts_to_one_course(self):
        enrol(self.user, make_course(95, 'one'))
        enrol(self.user, make_course(96, 'two'))

        self.assertEqual(ids(self.query(login_as_course_id=96)), [96])

    def test_rounded_now(self):
        self.assertEqual(rounded_now(lambda: 1234567.0), 1234600)
        self.assertEqual(rounded_now(lambda: 1234549.0), 1234500)


class TestVisibility(DatabaseTestCase):

    def test_visible_course_needs_no_capability(self):
        make_course(100, 'visible')
        self.assertTrue(self.source.resolve_visibility(100, self.user.id))

    def test_hidden_course_requires_override(self):
        hidden = make_course(101, 'hidden', visible=False)
        self.assertFalse(self.source.resolve_visibility(101, self.user.id))

        grant_view_hidden(self.user, hidden)
        source = SQLAlchemyCourseDataSource(site_course_id=1)
        self.assertTrue(source.resolve_visibility(101, self.user.id))

    def test_site_wide_override_applies_to_every_course(self):
        make_course(102, 'hidden', visible=False)
        grant_view_hidden(self.user)

        self.assertTrue(self.source.resolve_visibility(102, self.user.id))

    def test_override_in_another_course_does_not_apply(self):
        make_course(103, 'hidden', visible=False)
        grant_view_hidden(self.user, make_course(104, 'elsewhere', visible=False))

        self.assertFalse(self.source.resolve_visibility(103, self.user.id))

    def test_unknown_course_is_not_visible(self):
        self.assertFalse(self.source.resolve_visibility(999, self.user.id))


class TestSelectorOnDatabase(DatabaseTestCase):

    def test_active_course_wins_over_enrolment(self):
        """Completion in course 7 (enrolled 100, started 150) and a valid enrolment in 9."""
        course7 = make_course(7, 'seven')
        course9 = make_course(9, 'nine')
        track_completion(self.user, course7, timeenrolled=100, timestarted=150)
        enrol(self.user, course9)

        self.assertEqual(ids(self.selector.get_active_or_other_courses(self.user)), [7])

    def test_hidden_enrolment_without_override_is_dropped(self):
        """No completions, hidden course 3 without override, visible course 4."""
        enrol(self.user, make_course(3, 'three', visible=False))
        enrol(self.user, make_course(4, 'four'))

        self.assertEqual(ids(self.selector.get_active_or_other_courses(self.user)), [4])

    def test_hidden_enrolment_with_override_is_kept(self):
        hidden = make_course(3, 'three', fullname='Hidden', visible=False)
        enrol(self.user, hidden)
        enrol(self.user, make_course(4, 'four', fullname='Visible'))
        grant_view_hidden(self.user, hidden)

        self.assertEqual(ids(self.selector.get_active_or_other_courses(self.user)), [4, 3])

    def test_completed_or_inactive_courses_never_fall_back(self):
        done = make_course(5, 'done')
        idle = make_course(6, 'idle')
        track_completion(self.user, done, timecompleted=300)
        track_completion(self.user, idle, timestarted=0)
        enrol(self.user, done)
        enrol(self.user, idle)
        enrol(self.user, make_course(8, 'fresh'))

        self.assertEqual(ids(self.selector.get_active_or_other_courses(self.user)), [8])

    def test_guest_gets_nothing(self):
        guest = make_user('guest', is_guest=True)
        track_completion(guest, make_course(11, 'eleven'))
        enrol(guest, make_course(12, 'twelve'))

        self.assertEqual(self.selector.get_active_or_other_courses(guest), [])

    def test_repeated_calls_are_identical(self):
        for course_id in (21, 22, 23):
            enrol(self.user, make_course(course_id, f'c{course_id}'))

        first = ids(self.selector.get_active_or_other_courses(self.user))
        second = ids(self.selector.get_active_or_other_courses(self.user))
        self.assertEqual(first, second)
        self.assertEqual(len(first), len(set(first)))


if __name__ == "__main__":
    unittest.main()
