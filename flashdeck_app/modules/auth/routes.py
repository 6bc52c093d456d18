# File: flashdeck_app/modules/auth/routes.py
from urllib.parse import urlparse

from flask import render_template, flash, redirect, url_for, request
from flask_login import login_user, logout_user, current_user

from . import auth_bp
from .forms import LoginForm, RegistrationForm
from .services import AuthService


def _safe_next(target):
    """Only follow relative redirects back into this app."""
    if not target:
        return None
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc:
        return None
    return target


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('decks.dashboard'))

    form = LoginForm()
    if form.validate_on_submit():
        user = AuthService.authenticate_user(form.username.data, form.password.data)
        if user is None:
            flash('Invalid username or password.', 'danger')
            return redirect(url_for('auth.login'))

        login_user(user, remember=form.remember_me.data)
        flash('Logged in successfully!', 'success')
        return redirect(_safe_next(request.args.get('next')) or url_for('decks.dashboard'))

    return render_template('auth/login.html', form=form)


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    logout_user()
    return redirect(url_for('auth.login'))


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    if current_user.is_authenticated:
        return redirect(url_for('decks.dashboard'))

    form = RegistrationForm()
    if form.validate_on_submit():
        AuthService.register_user(form.username.data, form.email.data, form.password.data)
        flash('Registration successful! Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', form=form)
