"""
Helpers Module - Utility functions for common operations
"""

import math
from flask import request, current_app
from flask_login import current_user
from extensions import db
from models import User


def get_json_body():
    """Request body as a dict; empty when missing or not JSON"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def get_page_args(default_limit):
    """Read ``page`` and ``limit`` query params, falling back on bad input"""
    page = _positive_int(request.args.get('page'), 1)
    limit = _positive_int(request.args.get('limit'), default_limit)
    return page, limit


def paginate(query, total_key, default_limit=9):
    """
    Run an ordered query for the requested page

    Args:
        query: SQLAlchemy select statement, already filtered and ordered
        total_key (str): Name of the total-count field, e.g. 'totalBlogs'
        default_limit (int): Page size when ``limit`` is absent or invalid

    Returns:
        tuple: (list of models, pagination dict)
    """
    page, limit = get_page_args(default_limit)
    result = db.paginate(query, page=page, per_page=limit, error_out=False, count=True)
    items = list(result.items)
    pagination = {
        'current': page,
        'total': math.ceil(result.total / limit) if result.total else 0,
        'count': len(items),
        total_key: result.total
    }
    return items, pagination


def filter_value(name):
    """Query param value, treating blank and 'all' as no filter"""
    value = (request.args.get(name) or '').strip()
    if not value or value.lower() == 'all':
        return None
    return value


def flag_is_set(name):
    return (request.args.get(name) or '').lower() == 'true'


def include_drafts():
    """Admins may ask listings for unpublished documents with ?published=all"""
    if (request.args.get('published') or '').lower() != 'all':
        return False
    return current_user.is_authenticated and current_user.is_admin


def distinct_values(column, *criteria):
    """Sorted distinct non-empty values of a scalar column"""
    query = db.select(column).where(*criteria).distinct() if criteria else db.select(column).distinct()
    return sorted(v for v in db.session.scalars(query) if v)


def distinct_list_values(column, *criteria):
    """Sorted distinct entries across a JSON list column"""
    query = db.select(column).where(*criteria) if criteria else db.select(column)
    values = set()
    for entries in db.session.scalars(query):
        values.update(entry for entry in entries or [] if entry)
    return sorted(values)


def find_or_none(model, object_id):
    return db.session.get(model, object_id) if object_id else None


def promote_to_admin(email=None):
    """
    Give a user the admin role

    Args:
        email (str, optional): User to promote; the oldest account when omitted

    Returns:
        User or None: The promoted user, or None when no user matched
    """
    if email:
        user = db.session.scalar(db.select(User).filter_by(email=email.strip().lower()))
    else:
        user = db.session.scalar(db.select(User).order_by(User.created_at.asc()).limit(1))

    if user is None:
        return None

    user.role = 'admin'
    db.session.commit()
    current_app.logger.info(f"User {user.email} is now an admin")
    return user
