"""
Blog Routes - Public reading and admin authoring of blog posts
"""

import json
from flask import request, jsonify, current_app
from flask_login import current_user
from sqlalchemy import cast, or_
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import Blog, slugify
from utils.data import BLOG_FIELDS, apply_payload, blog_to_dict, parse_payload
from utils.decorators import admin_required
from utils.helpers import (
    distinct_list_values,
    filter_value,
    find_or_none,
    get_json_body,
    include_drafts,
    paginate
)
from . import blogs_bp

DEFAULT_LIMIT = 9


def _not_found():
    return jsonify({'success': False, 'message': 'Blog not found'}), 404


def _duplicate():
    return jsonify({'success': False, 'message': 'Blog with this title/slug already exists'}), 400


@blogs_bp.route('/', methods=['GET'], strict_slashes=False)
def list_blogs():
    """Published blogs, newest first, with category and text search filters"""
    query = db.select(Blog)
    if not include_drafts():
        query = query.where(Blog.is_published.is_(True))

    category = filter_value('category')
    if category:
        # Match the quoted entry inside the serialized JSON list
        query = query.where(cast(Blog.categories, db.String).contains(json.dumps(category), autoescape=True))

    search = (request.args.get('search') or '').strip()
    if search:
        query = query.where(or_(
            Blog.title.icontains(search, autoescape=True),
            Blog.content.icontains(search, autoescape=True),
            Blog.excerpt.icontains(search, autoescape=True)
        ))

    blogs, pagination = paginate(query.order_by(Blog.created_at.desc()), 'totalBlogs', DEFAULT_LIMIT)

    return jsonify({
        'success': True,
        'data': {
            'blogs': [blog_to_dict(blog) for blog in blogs],
            'pagination': pagination,
            'categories': distinct_list_values(Blog.categories, Blog.is_published.is_(True))
        }
    })


@blogs_bp.route('/<slug>', methods=['GET'])
def get_blog(slug):
    """Single blog by slug; every read counts as a view"""
    blog = db.session.scalar(db.select(Blog).filter_by(slug=slug))
    if not blog:
        return _not_found()

    blog.views = (blog.views or 0) + 1
    db.session.commit()

    return jsonify({'success': True, 'data': blog_to_dict(blog)})


@blogs_bp.route('/', methods=['POST'], strict_slashes=False)
@admin_required
def create_blog():
    """Create a blog authored by the current admin"""
    values = parse_payload(get_json_body(), BLOG_FIELDS)
    blog = Blog(**values)
    blog.author_id = current_user.id
    blog.slug = slugify(blog.slug) if blog.slug else None
    blog.ensure_slug()
    blog.validate()

    if db.session.scalar(db.select(Blog.id).filter_by(slug=blog.slug)):
        return _duplicate()

    db.session.add(blog)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return _duplicate()

    current_app.logger.info(f"Blog created: {blog.id} by {current_user.email}")
    return jsonify({
        'success': True,
        'data': blog_to_dict(blog),
        'message': 'Blog created successfully'
    }), 201


@blogs_bp.route('/<blog_id>', methods=['PUT'])
@admin_required
def update_blog(blog_id):
    """Partial update of a blog"""
    blog = find_or_none(Blog, blog_id)
    if not blog:
        return _not_found()

    data = get_json_body()
    apply_payload(blog, data, BLOG_FIELDS)
    if 'slug' in data:
        blog.slug = slugify(blog.slug or blog.title)
    blog.validate()

    with db.session.no_autoflush:
        clash = db.session.scalar(
            db.select(Blog.id).where(Blog.slug == blog.slug, Blog.id != blog.id)
        )
    if clash:
        db.session.rollback()
        return _duplicate()

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return _duplicate()

    return jsonify({
        'success': True,
        'data': blog_to_dict(blog),
        'message': 'Blog updated successfully'
    })


@blogs_bp.route('/<blog_id>', methods=['DELETE'])
@admin_required
def delete_blog(blog_id):
    blog = find_or_none(Blog, blog_id)
    if not blog:
        return _not_found()

    db.session.delete(blog)
    db.session.commit()

    current_app.logger.info(f"Blog deleted: {blog_id} by {current_user.email}")
    return jsonify({'success': True, 'message': 'Blog deleted successfully'})
