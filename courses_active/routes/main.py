from flask import Blueprint, render_template, current_app
from flask_login import current_user
from ..blocks.courses_active import get_block

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    """Dashboard with the active courses block"""
    block = get_block()
    if current_user.is_authenticated:
        current_app.logger.info(f"User {current_user.id} sees {len(block.content.items)} block items")
    return render_template('main/index.html', block=block, content=block.content)

@main_bp.route('/blocks/courses_active')
def courses_active_block():
    """Rendered block fragment only"""
    block = get_block()
    return render_template('blocks/courses_active.html', block=block, content=block.content)
