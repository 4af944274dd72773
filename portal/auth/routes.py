"""
Auth Routes

Registration, login and logout. Outcomes reach the user as flashes.
"""

import logging

from flask import current_app, redirect, request, url_for

from portal.auth import auth_bp
from portal.auth.middleware import USER_ID_KEY
from portal.errors import AuthError, ConflictError, ValidationError
from portal.extensions import sessions
from portal.services import authenticate, register as register_account
from portal.utils import flash_message, render_page

logger = logging.getLogger(__name__)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """User registration route"""
    if request.method == 'POST':
        username = request.form.get('username', '')
        password = request.form.get('password', '')

        try:
            register_account(username, password)
        except (ValidationError, ConflictError) as e:
            flash_message(e.message, 'danger')
            return render_page('register.html')

        flash_message('Registration successful!', 'success')
        return redirect(url_for('home.index'))

    return render_page('register.html')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if request.method == 'POST':
        username = request.form.get('username', '')
        password = request.form.get('password', '')

        try:
            user = authenticate(username, password)
        except AuthError as e:
            flash_message(e.message, 'danger')
            return redirect(url_for('auth.login'))

        # SessionError here fails the request; the token is rotated before
        # the user id goes in
        session = sessions.get(request)
        session.regenerate()
        session.set(USER_ID_KEY, user.id)
        session.save()
        logger.info('User %s logged in', user.username)

        flash_message('Login successful!', 'success')
        response = redirect(url_for('home.index'))
        response.set_cookie(
            current_app.config['LOGIN_COOKIE_NAME'], session.id,
            max_age=current_app.config['LOGIN_COOKIE_LIFETIME'], httponly=True,
        )
        return response

    return render_page('login.html')


@auth_bp.route('/logout')
def logout():
    """User logout route"""
    session = sessions.get(request)
    session.destroy()

    # Lands in the fresh session handed out after destroy()
    flash_message('Logout successful', 'success')

    response = redirect(url_for('home.index'))
    response.delete_cookie(current_app.config['LOGIN_COOKIE_NAME'])
    return response
