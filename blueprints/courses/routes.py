"""
Course Routes - Course catalogue
"""

from flask import jsonify, current_app
from flask_login import current_user
from extensions import db
from models import Course
from utils.data import COURSE_FIELDS, apply_payload, course_to_dict, parse_payload
from utils.decorators import admin_required
from utils.helpers import (
    distinct_values,
    filter_value,
    find_or_none,
    flag_is_set,
    get_json_body,
    include_drafts,
    paginate
)
from . import courses_bp

DEFAULT_LIMIT = 9


def _not_found():
    return jsonify({'success': False, 'message': 'Course not found'}), 404


@courses_bp.route('/', methods=['GET'], strict_slashes=False)
def list_courses():
    """Published courses, newest first, filterable by category, level and featured flag"""
    query = db.select(Course)
    if not include_drafts():
        query = query.where(Course.is_published.is_(True))

    category = filter_value('category')
    if category:
        query = query.where(Course.category == category)

    level = filter_value('level')
    if level:
        query = query.where(Course.level == level)

    if flag_is_set('featured'):
        query = query.where(Course.featured.is_(True))

    courses, pagination = paginate(query.order_by(Course.created_at.desc()), 'totalCourses', DEFAULT_LIMIT)

    published = Course.is_published.is_(True)
    return jsonify({
        'success': True,
        'data': {
            'courses': [course_to_dict(course) for course in courses],
            'pagination': pagination,
            'categories': distinct_values(Course.category, published),
            'levels': distinct_values(Course.level, published)
        }
    })


@courses_bp.route('/<course_id>', methods=['GET'])
def get_course(course_id):
    course = find_or_none(Course, course_id)
    if not course:
        return _not_found()
    return jsonify({'success': True, 'data': course_to_dict(course)})


@courses_bp.route('/', methods=['POST'], strict_slashes=False)
@admin_required
def create_course():
    course = Course(**parse_payload(get_json_body(), COURSE_FIELDS))
    course.validate()

    db.session.add(course)
    db.session.commit()

    current_app.logger.info(f"Course created: {course.id} by {current_user.email}")
    return jsonify({
        'success': True,
        'data': course_to_dict(course),
        'message': 'Course created successfully'
    }), 201


@courses_bp.route('/<course_id>', methods=['PUT'])
@admin_required
def update_course(course_id):
    course = find_or_none(Course, course_id)
    if not course:
        return _not_found()

    apply_payload(course, get_json_body(), COURSE_FIELDS)
    course.validate()
    db.session.commit()

    return jsonify({
        'success': True,
        'data': course_to_dict(course),
        'message': 'Course updated successfully'
    })


@courses_bp.route('/<course_id>', methods=['DELETE'])
@admin_required
def delete_course(course_id):
    course = find_or_none(Course, course_id)
    if not course:
        return _not_found()

    db.session.delete(course)
    db.session.commit()

    current_app.logger.info(f"Course deleted: {course_id} by {current_user.email}")
    return jsonify({'success': True, 'message': 'Course deleted successfully'})
