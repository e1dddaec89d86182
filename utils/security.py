"""
Security Module - Tokens, rate limiting, IP tracking and credentials
"""

import hashlib
import math
import re
import secrets
import threading
import time
from datetime import timedelta
from flask import request, current_app
from jose import jwt, JWTError
from werkzeug.security import generate_password_hash, check_password_hash
from extensions import db
from models import User


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [timestamp, ...]}
FAILED_LOGINS = {}  # {(ip, email): [timestamp, ...]}
_rate_limit_lock = threading.Lock()

_DURATION_PATTERN = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_DURATION_UNITS = {'': 1, 's': 1, 'm': 60, 'h': 3600, 'd': 86400}


def get_client_ip():
    """Client IP address; ProxyFix rewrites it when the app sits behind trusted proxies"""
    return request.remote_addr or 'unknown'


def log_ip_activity(activity_type, details=''):
    """Log IP activity for security tracking"""
    current_app.logger.info(
        "security event=%s ip=%s details=%s user_agent=%s",
        activity_type,
        get_client_ip(),
        details,
        request.headers.get('User-Agent', 'Unknown')[:100]
    )


def _prune(timestamps, window, now):
    return [ts for ts in timestamps if now - ts < window]


def _retry_after(timestamps, window, now):
    return max(1, math.ceil(window - (now - timestamps[0])))


def _evict_stale(table, window, now):
    """Drop keys whose newest timestamp has left the window"""
    stale = [key for key, timestamps in table.items() if not timestamps or now - timestamps[-1] >= window]
    for key in stale:
        del table[key]


def check_rate_limit(max_requests=None, window=None):
    """
    Record a request from the client IP against the global API budget

    Returns:
        int: 0 when the request is allowed, otherwise seconds until retry
    """
    max_requests = max_requests or current_app.config['RATE_LIMIT_MAX_REQUESTS']
    window = window or current_app.config['RATE_LIMIT_WINDOW']
    client_ip = get_client_ip()
    now = time.time()

    with _rate_limit_lock:
        _evict_stale(RATE_LIMIT_REQUESTS, window, now)
        history = _prune(RATE_LIMIT_REQUESTS.get(client_ip, []), window, now)
        if len(history) >= max_requests:
            RATE_LIMIT_REQUESTS[client_ip] = history
            return _retry_after(history, window, now)
        history.append(now)
        RATE_LIMIT_REQUESTS[client_ip] = history
    return 0


def login_retry_after(email):
    """Seconds the client must wait before another login attempt, or 0"""
    key = (get_client_ip(), (email or '').lower())
    window = current_app.config['LOGIN_ATTEMPT_WINDOW']
    now = time.time()

    with _rate_limit_lock:
        _evict_stale(FAILED_LOGINS, window, now)
        failures = _prune(FAILED_LOGINS.get(key, []), window, now)
        if failures:
            FAILED_LOGINS[key] = failures
        else:
            FAILED_LOGINS.pop(key, None)
        if len(failures) >= current_app.config['LOGIN_MAX_ATTEMPTS']:
            return _retry_after(failures, window, now)
    return 0


def record_failed_login(email):
    key = (get_client_ip(), (email or '').lower())
    with _rate_limit_lock:
        FAILED_LOGINS.setdefault(key, []).append(time.time())


def clear_failed_logins(email):
    key = (get_client_ip(), (email or '').lower())
    with _rate_limit_lock:
        FAILED_LOGINS.pop(key, None)


def reset_rate_limits():
    """Forget all recorded requests and failed logins"""
    with _rate_limit_lock:
        RATE_LIMIT_REQUESTS.clear()
        FAILED_LOGINS.clear()


# Passwords

def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


# JWT

def parse_duration(value):
    """Convert '30d', '12h', '15m', '45s' or plain seconds into a timedelta"""
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit])


def generate_token(user_id):
    """Issue a signed JWT for the given user id"""
    issued = int(time.time())
    payload = {
        'id': user_id,
        'iat': issued,
        'exp': issued + int(parse_duration(current_app.config['JWT_EXPIRE']).total_seconds()),
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET'],
                      algorithm=current_app.config['JWT_ALGORITHM'])


def decode_token(token):
    """
    Return the user id carried by a JWT

    Raises:
        JWTError: If the token is malformed, expired or badly signed
    """
    payload = jwt.decode(token, current_app.config['JWT_SECRET'],
                         algorithms=[current_app.config['JWT_ALGORITHM']])
    user_id = payload.get('id')
    if not user_id:
        raise JWTError('Token has no subject')
    return user_id


def get_bearer_token(req=None):
    header = (req or request).headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return None


def load_user_from_request(req):
    """Flask-Login request loader: resolve the bearer token to a user"""
    token = get_bearer_token(req)
    if not token:
        return None
    try:
        user_id = decode_token(token)
    except JWTError as e:
        current_app.logger.debug(f"Rejected bearer token: {str(e)}")
        return None
    return db.session.get(User, user_id)


# One-time tokens (password reset, email verification)

def generate_one_time_token():
    """
    Returns:
        tuple: (raw token sent to the user, SHA-256 digest to store)
    """
    raw = secrets.token_hex(20)
    return raw, hash_one_time_token(raw)


def hash_one_time_token(raw):
    return hashlib.sha256(raw.encode('utf-8')).hexdigest()


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'login_retry_after',
    'record_failed_login',
    'clear_failed_logins',
    'reset_rate_limits',
    'log_ip_activity',
    'hash_password',
    'verify_password',
    'parse_duration',
    'generate_token',
    'decode_token',
    'get_bearer_token',
    'load_user_from_request',
    'generate_one_time_token',
    'hash_one_time_token'
]
