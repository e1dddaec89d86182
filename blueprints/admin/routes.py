"""
Admin Routes - Dashboard statistics and user management
Every route in this blueprint requires an admin token.
"""

from flask import jsonify
from flask_login import current_user
from sqlalchemy import func
from extensions import db
from models import User, Blog, Project, Course, Contact, USER_ROLES
from utils.data import author_to_dict, format_timestamp, user_to_dict
from utils.decorators import admin_error
from utils.helpers import find_or_none, get_json_body, paginate
from utils.security import log_ip_activity
from . import admin_bp

RECENT_LIMIT = 5
DEFAULT_LIMIT = 10


@admin_bp.before_request
def require_admin():
    return admin_error()


def _user_not_found():
    return jsonify({'success': False, 'message': 'User not found'}), 404


def _count(model, *criteria):
    query = db.select(func.count()).select_from(model)
    if criteria:
        query = query.where(*criteria)
    return db.session.scalar(query)


@admin_bp.route('/dashboard', methods=['GET'])
def dashboard():
    """Site totals plus the most recent users and blogs"""
    recent_users = db.session.scalars(
        db.select(User).order_by(User.created_at.desc()).limit(RECENT_LIMIT)
    )
    recent_blogs = db.session.scalars(
        db.select(Blog).order_by(Blog.created_at.desc()).limit(RECENT_LIMIT)
    )

    return jsonify({
        'success': True,
        'data': {
            'stats': {
                'totalUsers': _count(User),
                'totalBlogs': _count(Blog),
                'totalProjects': _count(Project),
                'totalCourses': _count(Course),
                'totalContacts': _count(Contact),
                'newContacts': _count(Contact, Contact.status == 'new')
            },
            'recentUsers': [
                {
                    '_id': user.id,
                    'name': user.name,
                    'email': user.email,
                    'role': user.role,
                    'createdAt': format_timestamp(user.created_at)
                }
                for user in recent_users
            ],
            'recentBlogs': [
                {
                    '_id': blog.id,
                    'title': blog.title,
                    'author': author_to_dict(blog.author),
                    'views': blog.views or 0,
                    'isPublished': bool(blog.is_published),
                    'createdAt': format_timestamp(blog.created_at)
                }
                for blog in recent_blogs
            ]
        }
    })


@admin_bp.route('/users', methods=['GET'])
def list_users():
    query = db.select(User).order_by(User.created_at.desc())
    users, pagination = paginate(query, 'totalUsers', DEFAULT_LIMIT)

    return jsonify({
        'success': True,
        'data': {
            'users': [user_to_dict(user) for user in users],
            'pagination': pagination
        }
    })


@admin_bp.route('/users/<user_id>/role', methods=['PUT'])
def update_user_role(user_id):
    role = get_json_body().get('role')
    if role not in USER_ROLES:
        return jsonify({'success': False, 'message': 'Invalid role'}), 400

    user = find_or_none(User, user_id)
    if not user:
        return _user_not_found()

    user.role = role
    db.session.commit()

    log_ip_activity('role_changed', f"User: {user.email} role={role} by {current_user.email}")
    return jsonify({
        'success': True,
        'data': user_to_dict(user),
        'message': f'User role updated to {role}'
    })


@admin_bp.route('/users/<user_id>', methods=['DELETE'])
def delete_user(user_id):
    user = find_or_none(User, user_id)
    if not user:
        return _user_not_found()

    email, actor = user.email, current_user.email
    db.session.delete(user)
    db.session.commit()

    log_ip_activity('user_deleted', f"User: {email} by {actor}")
    return jsonify({'success': True, 'message': 'User deleted successfully'})
