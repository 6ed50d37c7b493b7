from urllib.parse import urlparse

from flask import Blueprint, render_template, redirect, url_for, flash, request, abort
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import IntegrityError

from pharma import db, get_config, limiter
from pharma.data.password_validator import PasswordValidator
from pharma.data.user import User
from pharma.logger import get_logger
from pharma.utils.logging_sanitizer import sanitize_form_data

logger = get_logger("pharma.auth")
auth = Blueprint('auth', __name__)


def _login_rate_limit():
    return get_config().login_rate_limit


def _safe_next_page():
    next_page = request.args.get('next')
    if not next_page or urlparse(next_page).netloc != '':
        return url_for('medicines.list')
    return next_page


@auth.route('/login', methods=['GET', 'POST'])
@limiter.limit(_login_rate_limit, methods=['POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('medicines.list'))

    if request.method == 'POST':
        username = (request.form.get('username') or '').strip()
        password = request.form.get('password') or ''

        logger.debug(f"Login attempt: {sanitize_form_data(request.form)}")

        if not username or not password:
            flash('Provide username and password', 'error')
            return render_template('auth/login.html', username=username), 400

        user = User.query.filter_by(username=username).first()
        if user is None or not user.check_password(password):
            logger.warning(f"Failed login attempt for username: {username}")
            flash('Invalid credentials', 'error')
            return render_template('auth/login.html', username=username), 401

        if not user.is_active:
            logger.warning(f"Login attempt for disabled account: {username}")
            flash('Account is disabled', 'error')
            return render_template('auth/login.html', username=username), 403

        login_user(user)
        logger.info(f"Successful login for user: {username}")
        return redirect(_safe_next_page())

    return render_template('auth/login.html')


@auth.route('/signup', methods=['GET', 'POST'])
def signup():
    if not get_config().allow_signup:
        abort(404)

    if request.method == 'POST':
        username = (request.form.get('username') or '').strip()
        password = request.form.get('password') or ''

        if not username or not password:
            flash('Provide username and password', 'error')
            return render_template('auth/signup.html', username=username), 400

        is_valid, message = PasswordValidator.validate(password)
        if not is_valid:
            flash(message, 'error')
            return render_template('auth/signup.html', username=username), 400

        if User.query.filter_by(username=username).first() is not None:
            flash('That username is taken', 'error')
            return render_template('auth/signup.html', username=username), 409

        user = User(username=username, role='admin')
        user.set_password(password)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash('That username is taken', 'error')
            return render_template('auth/signup.html', username=username), 409

        logger.info(f"User signed up: {username}")
        flash('Account created, please log in', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/signup.html', requirements=PasswordValidator.get_requirements_text())


@auth.route('/logout')
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    flash('You have been logged out', 'info')
    return redirect(url_for('auth.login'))
