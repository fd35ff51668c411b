"""
Auth Routes

Contributor sign up and login using Flask-Login.
"""

import logging
from urllib.parse import urljoin, urlparse

from flask import render_template, request, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from werkzeug.security import generate_password_hash, check_password_hash

from nephranet.auth import auth_bp
from nephranet.extensions import db
from nephranet.models import User

logger = logging.getLogger(__name__)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """User registration route"""
    if current_user.is_authenticated:
        return redirect(url_for('readings.index'))

    if request.method == 'POST':
        name = request.form.get('name', '').strip()
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')
        confirm_password = request.form.get('confirm_password', '')

        # Validation
        if not email or '@' not in email:
            flash('Please provide a valid email address.', 'danger')
            return render_template('auth/register.html', name=name, email=email)

        if not password or len(password) < 6:
            flash('Password must be at least 6 characters long.', 'danger')
            return render_template('auth/register.html', name=name, email=email)

        if password != confirm_password:
            flash('Passwords do not match.', 'danger')
            return render_template('auth/register.html', name=name, email=email)

        if User.query.filter_by(email=email).first():
            flash('Email already registered. Please login or use another email.', 'danger')
            return render_template('auth/register.html', name=name, email=email)

        hashed_password = generate_password_hash(password, method='pbkdf2:sha256')
        new_user = User(email=email, name=name or None, password_hash=hashed_password)

        try:
            db.session.add(new_user)
            db.session.commit()
            flash('Registration successful! Please login.', 'success')
            return redirect(url_for('auth.login'))
        except Exception as e:
            db.session.rollback()
            logger.exception('Registration error: %s', e)
            flash('An error occurred during registration. Please try again.', 'danger')

    return render_template('auth/register.html', name='', email='')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if current_user.is_authenticated:
        return redirect(url_for('readings.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')
        remember = bool(request.form.get('remember'))

        if not email or not password:
            flash('Please provide both email and password.', 'danger')
            return render_template('auth/login.html', email=email)

        user = User.query.filter_by(email=email).first()

        if user and check_password_hash(user.password_hash, password):
            login_user(user, remember=remember)
            flash(f'Welcome back, {user.display_name}!', 'success')

            next_page = request.args.get('next')
            if next_page and _is_local_url(next_page):
                return redirect(next_page)
            return redirect(url_for('readings.index'))

        flash('Invalid email or password. Please try again.', 'danger')
        return render_template('auth/login.html', email=email)

    return render_template('auth/login.html', email='')


@auth_bp.route('/logout')
@login_required
def logout():
    """User logout route"""
    logout_user()
    flash('You have been logged out successfully.', 'info')
    return redirect(url_for('readings.index'))


def _is_local_url(target):
    if '\\' in target or target.startswith('//'):
        return False
    host = urlparse(request.host_url)
    resolved = urlparse(urljoin(request.host_url, target))
    return resolved.scheme in ('http', 'https') and resolved.netloc == host.netloc
