from flask import Blueprint, render_template, redirect, url_for, flash, request, session
from flask_login import login_user, logout_user, login_required, current_user
from ..models.user import User
import logging

logger = logging.getLogger(__name__)
auth_bp = Blueprint('auth', __name__)

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    if request.method == 'POST':
        email = request.form.get('email')
        password = request.form.get('password')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('auth/login.html')

        user = User.query.filter_by(email=email).first()

        if not user or not user.password_hash or not user.check_password(password):
            logger.info(f"Failed login for {email}")
            flash('Invalid email or password', 'error')
            return render_template('auth/login.html')

        login_user(user, remember=True)
        logger.info(f"User {user.id} logged in")
        next_page = request.args.get('next')

        if not next_page or not next_page.startswith('/'):
            next_page = url_for('main.index')

        return redirect(next_page)

    return render_template('auth/login.html')

@auth_bp.route('/logout')
@login_required
def logout():
    session.pop('loginas_course_id', None)
    logout_user()
    return redirect(url_for('main.index'))
