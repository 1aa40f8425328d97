from flask import Blueprint, render_template, abort
import logging
from ..blocks.courses_active import get_block
from ..models.course import Course
from .. import db

logger = logging.getLogger(__name__)

courses_bp = Blueprint('courses', __name__)

@courses_bp.route('/<int:course_id>')
def view(course_id):
    """Course page"""
    course = db.session.get(Course, course_id)
    if course is None:
        logger.warning(f"Course {course_id} not found")
        abort(404)

    block = get_block()
    return render_template('courses/view.html', course=course, block=block, content=block.content)
