"""
Active courses block: the sidebar list of a user's in-progress courses.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from flask import current_app, g, session, url_for
from flask_login import current_user

from ..lang import get_string
from ..models.user import is_real_user
from ..selector import CourseSelector
from ..utils.data_source import SQLAlchemyCourseDataSource

logger = logging.getLogger(__name__)

COURSE_ICON = 'img/course.svg'


@dataclass
class BlockItem:
    text: str
    course_id: int = None
    title: str = ""
    url: str = ""

    @property
    def is_link(self):
        return self.course_id is not None


@dataclass
class BlockContent:
    items: List[BlockItem] = field(default_factory=list)
    icons: List[str] = field(default_factory=list)
    footer: str = ""


class ActiveCoursesBlock:
    def __init__(self, selector, user):
        self.selector = selector
        self.user = user
        self.title = get_string('pluginname')
        self.content = None

    def has_config(self):
        return True

    def get_content(self, sort=None, limit=None, login_as_course_id=None):
        if self.content is not None:
            return self.content

        self.content = BlockContent()

        if not is_real_user(self.user):
            return self.content

        if sort is None:
            sort = current_app.config['ACTIVE_COURSES_SORT']
        if limit is None:
            limit = current_app.config['ACTIVE_COURSES_LIMIT']

        icon = url_for('static', filename=COURSE_ICON)
        courses = self.selector.get_active_or_other_courses(
            self.user, sort=sort, limit=limit, login_as_course_id=login_as_course_id)
        for course in courses:
            self.content.items.append(BlockItem(
                text=course.fullname,
                course_id=course.id,
                title=course.shortname,
                url=url_for('courses.view', course_id=course.id),
            ))
            self.content.icons.append(icon)

        if not self.content.items:
            # Make sure we don't return an empty list.
            self.content.icons.append('')
            self.content.items.append(BlockItem(text=get_string('noactivecourses')))

        return self.content


def get_block():
    """The block for the current user, built once per request"""
    if 'courses_active_block' not in g:
        data_source = SQLAlchemyCourseDataSource(site_course_id=current_app.config['SITE_COURSE_ID'])
        g.courses_active_block = ActiveCoursesBlock(CourseSelector(data_source), current_user)
        g.courses_active_block.get_content(login_as_course_id=session.get('loginas_course_id'))
    return g.courses_active_block
