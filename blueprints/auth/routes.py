"""
Auth Routes - Authentication and account management
"""

from datetime import timedelta
from flask import request, jsonify, current_app
from flask_login import current_user
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import User, utcnow
from utils.decorators import login_required
from utils.google_auth import GoogleAuthError, verify_google_id_token
from utils.helpers import get_json_body
from utils.notifications import (
    email_configured,
    password_reset_email,
    send_email,
    verification_email
)
from utils.security import (
    clear_failed_logins,
    generate_one_time_token,
    generate_token,
    hash_one_time_token,
    hash_password,
    log_ip_activity,
    login_retry_after,
    record_failed_login,
    verify_password
)
from utils.data import user_to_dict
from . import auth_bp

MIN_PASSWORD_LENGTH = 6


def _text(data, key):
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ''


def _error(message, status):
    return jsonify({'success': False, 'message': message}), status


def _password_error(password):
    if len(password) < MIN_PASSWORD_LENGTH:
        return _error(f'Password must be at least {MIN_PASSWORD_LENGTH} characters', 400)
    return None


def _find_by_email(email):
    return db.session.scalar(db.select(User).filter_by(email=email.lower()))


def _find_google_user(google_id, email):
    return db.session.scalar(
        db.select(User).where(or_(User.google_id == google_id, User.email == email))
    )


def _with_token(user, message=None):
    """User fields plus a freshly signed token"""
    body = {'success': True, **user_to_dict(user), 'token': generate_token(user.id)}
    if message:
        body['message'] = message
    return body


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create a local account"""
    data = get_json_body()
    name = _text(data, 'name')
    email = _text(data, 'email').lower()
    password = data.get('password') if isinstance(data.get('password'), str) else ''

    if not name or not email or not password:
        return _error('Please provide name, email and password', 400)

    error = _password_error(password)
    if error:
        return error

    if _find_by_email(email):
        return _error('User already exists', 400)

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        login_method='local'
    )
    user.validate()
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return _error('User already exists', 400)

    log_ip_activity('register', f"User: {email}")
    return jsonify(_with_token(user, 'Registration successful')), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for a token"""
    data = get_json_body()
    email = _text(data, 'email').lower()
    password = data.get('password') if isinstance(data.get('password'), str) else ''

    if not email or not password:
        return _error('Please provide email and password', 400)

    retry_after = login_retry_after(email)
    if retry_after:
        log_ip_activity('login_throttled', f"Email: {email}")
        response = jsonify({
            'success': False,
            'message': f'Too many login attempts. Please wait {retry_after} seconds and try again.'
        })
        response.status_code = 429
        response.headers['Retry-After'] = str(retry_after)
        return response

    user = _find_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        record_failed_login(email)
        log_ip_activity('failed_login', f"Email: {email}")
        return _error('Invalid credentials', 401)

    clear_failed_logins(email)
    log_ip_activity('user_login', f"User: {email}")
    return jsonify(_with_token(user, f'Welcome back, {user.name}!'))


@auth_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    """Current user's profile"""
    return jsonify({'success': True, **user_to_dict(current_user)})


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    """Update name, email, avatar or password of the current user"""
    data = get_json_body()
    user = current_user._get_current_object()

    if 'name' in data:
        user.name = _text(data, 'name')

    if 'email' in data:
        email = _text(data, 'email').lower()
        if email != user.email:
            existing = _find_by_email(email) if email else None
            if existing and existing.id != user.id:
                return _error('Email is already in use', 400)
            user.email = email
            if user.login_method == 'local':
                user.is_verified = False

    if 'avatar' in data:
        user.avatar = _text(data, 'avatar')

    password = data.get('password')
    if password:
        if not isinstance(password, str):
            return _error('Password must be text', 400)
        error = _password_error(password)
        if error:
            return error
        user.password_hash = hash_password(password)

    user.validate()
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return _error('Email is already in use', 400)

    return jsonify(_with_token(user, 'Profile updated successfully'))


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Start a password reset by emailing a one-time link"""
    email = _text(get_json_body(), 'email').lower()
    if not email:
        return _error('Please provide an email', 400)

    user = _find_by_email(email)
    if not user:
        return _error('No account found with this email', 404)

    raw_token, token_hash = generate_one_time_token()
    user.reset_password_token = token_hash
    user.reset_password_expire = utcnow() + timedelta(seconds=current_app.config['RESET_TOKEN_TTL'])
    db.session.commit()

    reset_url = f"{current_app.config['CLIENT_URL'].rstrip('/')}/reset-password/{raw_token}"
    if email_configured():
        sent = send_email(user.email, 'Password Reset Request', password_reset_email(user.name, reset_url))
        if not sent:
            current_app.logger.warning(f"Password reset email to {user.email} could not be delivered")
    else:
        current_app.logger.warning(f"SMTP not configured, password reset link for {user.email} not delivered")

    log_ip_activity('password_reset_requested', f"User: {user.email}")
    return jsonify({
        'success': True,
        'message': 'Password reset process initiated successfully'
    })


@auth_bp.route('/reset-password/<token>', methods=['PUT'])
def reset_password(token):
    """Set a new password using a reset token"""
    password = get_json_body().get('password')
    if not isinstance(password, str) or not password:
        return _error('Please provide a new password', 400)
    error = _password_error(password)
    if error:
        return error

    user = db.session.scalar(
        db.select(User).where(
            User.reset_password_token == hash_one_time_token(token),
            User.reset_password_expire > utcnow()
        )
    )
    if not user:
        return _error('Invalid or expired reset token', 400)

    user.password_hash = hash_password(password)
    user.reset_password_token = None
    user.reset_password_expire = None
    db.session.commit()

    clear_failed_logins(user.email)
    log_ip_activity('password_reset', f"User: {user.email}")
    return jsonify({
        'success': True,
        'message': 'Password reset successful',
        'token': generate_token(user.id)
    })


@auth_bp.route('/send-verification', methods=['POST'])
@login_required
def send_verification():
    """Email the current user a verification link"""
    user = current_user._get_current_object()
    if user.is_verified:
        return _error('Email already verified', 400)

    raw_token, token_hash = generate_one_time_token()
    user.verification_token = token_hash
    user.verification_expire = utcnow() + timedelta(seconds=current_app.config['VERIFICATION_TOKEN_TTL'])
    db.session.commit()

    verification_url = f"{current_app.config['CLIENT_URL'].rstrip('/')}/verify-email/{raw_token}"
    if not send_email(user.email, 'Verify Your Email', verification_email(user.name, verification_url)):
        return _error('Error sending verification email', 500)

    return jsonify({
        'success': True,
        'message': 'Verification email sent successfully'
    })


@auth_bp.route('/verify-email/<token>', methods=['POST'])
def verify_email(token):
    """Mark the account owning the token as verified"""
    user = db.session.scalar(
        db.select(User).filter_by(verification_token=hash_one_time_token(token))
    )
    if not user or (user.verification_expire and user.verification_expire <= utcnow()):
        return _error('Invalid verification token', 400)

    user.is_verified = True
    user.verification_token = None
    user.verification_expire = None
    db.session.commit()

    log_ip_activity('email_verified', f"User: {user.email}")
    return jsonify({
        'success': True,
        'message': 'Email verified successfully',
        'token': generate_token(user.id)
    })


@auth_bp.route('/google', methods=['POST'])
def google_login():
    """Sign in or sign up with a Google ID token"""
    token = get_json_body().get('token')
    if not token or not isinstance(token, str):
        return _error('Google token is required', 400)

    try:
        claims = verify_google_id_token(token)
    except GoogleAuthError as e:
        current_app.logger.warning(f"Google auth error: {str(e)}")
        return _error('Google authentication failed', 401)

    google_id = claims['sub']
    email = claims['email'].strip().lower()
    picture = claims.get('picture') or ''

    user = _find_google_user(google_id, email)

    if user:
        if not user.google_id:
            user.google_id = google_id
            user.avatar = picture or user.avatar
            db.session.commit()
    else:
        user = User(
            google_id=google_id,
            name=claims.get('name') or email.split('@')[0],
            email=email,
            avatar=picture,
            is_verified=True,
            login_method='google'
        )
        user.validate()
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent sign-in created the account first
            db.session.rollback()
            user = _find_google_user(google_id, email)
            if user is None:
                raise
        else:
            log_ip_activity('register', f"User: {email} (google)")

    log_ip_activity('google_login', f"User: {email}")
    return jsonify({
        'success': True,
        'data': {**user_to_dict(user), 'token': generate_token(user.id)},
        'message': 'Google login successful'
    })
