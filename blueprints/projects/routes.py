"""
Project Routes - Portfolio projects
"""

from flask import jsonify, current_app
from flask_login import current_user
from extensions import db
from models import Project
from utils.data import PROJECT_FIELDS, apply_payload, parse_payload, project_to_dict
from utils.decorators import admin_required
from utils.helpers import (
    distinct_values,
    filter_value,
    find_or_none,
    flag_is_set,
    get_json_body,
    paginate
)
from . import projects_bp

DEFAULT_LIMIT = 9


def _not_found():
    return jsonify({'success': False, 'message': 'Project not found'}), 404


@projects_bp.route('/', methods=['GET'], strict_slashes=False)
def list_projects():
    """All projects, newest first, filterable by category and featured flag"""
    query = db.select(Project)

    category = filter_value('category')
    if category:
        query = query.where(Project.category == category)

    if flag_is_set('featured'):
        query = query.where(Project.featured.is_(True))

    projects, pagination = paginate(query.order_by(Project.created_at.desc()), 'totalProjects', DEFAULT_LIMIT)

    return jsonify({
        'success': True,
        'data': {
            'projects': [project_to_dict(project) for project in projects],
            'pagination': pagination,
            'categories': distinct_values(Project.category)
        }
    })


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    project = find_or_none(Project, project_id)
    if not project:
        return _not_found()
    return jsonify({'success': True, 'data': project_to_dict(project)})


@projects_bp.route('/', methods=['POST'], strict_slashes=False)
@admin_required
def create_project():
    project = Project(**parse_payload(get_json_body(), PROJECT_FIELDS))
    project.validate()

    db.session.add(project)
    db.session.commit()

    current_app.logger.info(f"Project created: {project.id} by {current_user.email}")
    return jsonify({
        'success': True,
        'data': project_to_dict(project),
        'message': 'Project created successfully'
    }), 201


@projects_bp.route('/<project_id>', methods=['PUT'])
@admin_required
def update_project(project_id):
    project = find_or_none(Project, project_id)
    if not project:
        return _not_found()

    apply_payload(project, get_json_body(), PROJECT_FIELDS)
    project.validate()
    db.session.commit()

    return jsonify({
        'success': True,
        'data': project_to_dict(project),
        'message': 'Project updated successfully'
    })


@projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    project = find_or_none(Project, project_id)
    if not project:
        return _not_found()

    db.session.delete(project)
    db.session.commit()

    current_app.logger.info(f"Project deleted: {project_id} by {current_user.email}")
    return jsonify({'success': True, 'message': 'Project deleted successfully'})
