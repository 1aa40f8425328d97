from flask import Blueprint, current_app, jsonify, request, session
from flask_login import current_user
import logging
from ..errors import InvalidLimit
from ..selector import CourseSelector
from ..utils.data_source import SQLAlchemyCourseDataSource
from ..utils.error_handlers import handle_errors

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)

@api_bp.route('/active-courses')
@handle_errors
def active_courses():
    """Active courses of the current user, or their other accessible courses, as JSON"""
    sort = request.args.get('sort', current_app.config['ACTIVE_COURSES_SORT'])
    fields = request.args.get('fields') or None

    raw_limit = request.args.get('limit', str(current_app.config['ACTIVE_COURSES_LIMIT']))
    try:
        limit = int(raw_limit)
    except ValueError:
        raise InvalidLimit(f'Limit must be a non-negative integer, got {raw_limit!r}')

    selector = CourseSelector(SQLAlchemyCourseDataSource(site_course_id=current_app.config['SITE_COURSE_ID']))
    courses = selector.get_active_or_other_courses(
        current_user, fields=fields, sort=sort, limit=limit,
        login_as_course_id=session.get('loginas_course_id'))

    logger.info(f"Returning {len(courses)} courses")
    return jsonify({
        'success': True,
        'courses': [course.to_dict() for course in courses]
    })
