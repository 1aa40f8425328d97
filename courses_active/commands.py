"""
Flask CLI commands: `flask init-db` and `flask seed-demo`.
"""
import time

import click
from flask import current_app
from flask.cli import with_appcontext

from . import db
from .models.completion import CourseCompletion
from .models.course import Course
from .models.enrollment import EnrolMethod, UserEnrolment, ENROL_INSTANCE_DISABLED, ENROL_INSTANCE_ENABLED
from .models.user import User, CapabilityGrant, VIEW_HIDDEN_COURSES

DAY = 24 * 60 * 60


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Drop and recreate all tables."""
    db.drop_all()
    db.create_all()
    click.echo("Database initialized successfully!")


def seed_demo(now=None):
    """Populate a small demo site and return the created users by username"""
    now = int(now if now is not None else time.time())
    site_id = current_app.config['SITE_COURSE_ID']

    db.session.add(Course(id=site_id, shortname='site', fullname='Demo site', timecreated=now))
    db.session.flush()
    courses = {
        'PY101': Course(shortname='PY101', fullname='Python basics', timecreated=now),
        'SQL201': Course(shortname='SQL201', fullname='Relational databases', timecreated=now),
        'WEB110': Course(shortname='WEB110', fullname='Web foundations', timecreated=now),
        'ML300': Course(shortname='ML300', fullname='Machine learning', visible=False, timecreated=now),
        'OLD050': Course(shortname='OLD050', fullname='Archived course', timecreated=now),
    }
    db.session.add_all(courses.values())

    users = {
        'student': User(username='student', email='student@example.com'),
        'newcomer': User(username='newcomer', email='newcomer@example.com'),
        'instructor': User(username='instructor', email='instructor@example.com'),
        'guest': User(username='guest', email='guest@example.com', is_guest=True),
    }
    for user in users.values():
        if not user.is_guest:
            user.set_password('Password1')
    db.session.add_all(users.values())
    db.session.flush()

    methods = {}
    for shortname, course in courses.items():
        status = ENROL_INSTANCE_DISABLED if shortname == 'OLD050' else ENROL_INSTANCE_ENABLED
        methods[shortname] = EnrolMethod(courseid=course.id, status=status)
    db.session.add_all(methods.values())
    db.session.flush()

    def enrol(username, shortname):
        db.session.add(UserEnrolment(enrolid=methods[shortname].id, userid=users[username].id,
                                     timestart=now - 30 * DAY, timecreated=now - 30 * DAY))

    for shortname in ('PY101', 'SQL201', 'WEB110'):
        enrol('student', shortname)
    for shortname in ('WEB110', 'ML300', 'OLD050'):
        enrol('newcomer', shortname)
    for shortname in ('SQL201', 'ML300'):
        enrol('instructor', shortname)

    db.session.add_all([
        CourseCompletion(userid=users['student'].id, course=courses['SQL201'].id,
                         timeenrolled=now - 30 * DAY, timestarted=now - 20 * DAY),
        CourseCompletion(userid=users['student'].id, course=courses['PY101'].id,
                         timeenrolled=now - 30 * DAY, timestarted=now - 25 * DAY,
                         timecompleted=now - DAY),
        CapabilityGrant(userid=users['instructor'].id, capability=VIEW_HIDDEN_COURSES,
                        courseid=courses['ML300'].id),
    ])
    db.session.commit()
    return users


@click.command('seed-demo')
@with_appcontext
def seed_demo_command():
    """Load demo courses, users, enrolments and completions."""
    db.drop_all()
    db.create_all()
    users = seed_demo()
    click.echo(f"Seeded {len(users)} users; password for non-guest users is Password1")
