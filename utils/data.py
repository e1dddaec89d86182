"""
Data Module - Conversion between models and the JSON wire format

The SPA speaks camelCase with Mongo-style ``_id`` keys, so every model has an
explicit ``*_to_dict`` converter and a field map used to apply request bodies.
"""

import math
from datetime import date, datetime
from models import ValidationError


def format_timestamp(value):
    """ISO-8601 UTC string for a naive UTC datetime"""
    return value.isoformat() + 'Z' if value else None


def _date(value):
    return value.isoformat() if value else None


# --- Coercers: (raw JSON value) -> model value, raising ValueError on bad input

def as_str(value):
    if value is None:
        return None
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValueError('must be text')
    return str(value).strip()


def as_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false', '1', '0'):
        return value.lower() in ('true', '1')
    if isinstance(value, int):
        return bool(value)
    raise ValueError('must be true or false')


def as_int(value):
    if isinstance(value, bool):
        raise ValueError('must be a number')
    return int(value)


def as_float(value):
    if isinstance(value, bool):
        raise ValueError('must be a number')
    number = float(value)
    if not math.isfinite(number):
        raise ValueError('must be a finite number')
    return number


def as_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    if not isinstance(value, list):
        raise ValueError('must be a list')
    if not all(isinstance(item, str) for item in value):
        raise ValueError('must be a list of text')
    return [item.strip() for item in value if item.strip()]


def as_date(value):
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    # Accept both '2024-01-31' and full ISO timestamps from date pickers
    text = str(value).replace('Z', '+00:00')
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return date.fromisoformat(text[:10])


def as_lessons(value):
    lessons = value or []
    if not isinstance(lessons, list):
        raise ValueError('must be a list')
    result = []
    for lesson in lessons:
        if not isinstance(lesson, dict):
            raise ValueError('must be a list of objects')
        result.append({
            'title': lesson.get('title', ''),
            'duration': lesson.get('duration', ''),
            'videoUrl': lesson.get('videoUrl', ''),
            'description': lesson.get('description', ''),
        })
    return result


# --- Writable fields per model: {wire key: (attribute, coercer)}

BLOG_FIELDS = {
    'title': ('title', as_str),
    'slug': ('slug', as_str),
    'content': ('content', as_str),
    'excerpt': ('excerpt', as_str),
    'featuredImage': ('featured_image', as_str),
    'categories': ('categories', as_list),
    'tags': ('tags', as_list),
    'isPublished': ('is_published', as_bool),
    'readTime': ('read_time', as_int),
}

PROJECT_FIELDS = {
    'title': ('title', as_str),
    'description': ('description', as_str),
    'shortDescription': ('short_description', as_str),
    'images': ('images', as_list),
    'technologies': ('technologies', as_list),
    'liveUrl': ('live_url', as_str),
    'githubUrl': ('github_url', as_str),
    'category': ('category', as_str),
    'featured': ('featured', as_bool),
    'status': ('status', as_str),
    'startDate': ('start_date', as_date),
    'endDate': ('end_date', as_date),
}

COURSE_FIELDS = {
    'title': ('title', as_str),
    'description': ('description', as_str),
    'shortDescription': ('short_description', as_str),
    'thumbnail': ('thumbnail', as_str),
    'price': ('price', as_float),
    'duration': ('duration', as_str),
    'level': ('level', as_str),
    'category': ('category', as_str),
    'instructor': ('instructor', as_str),
    'rating': ('rating', as_float),
    'studentsEnrolled': ('students_enrolled', as_int),
    'lessons': ('lessons', as_lessons),
    'featured': ('featured', as_bool),
    'isPublished': ('is_published', as_bool),
}


def parse_payload(payload, fields):
    """
    Translate a request body into model attributes

    Args:
        payload (dict): Decoded JSON body
        fields (dict): Field map for the target model

    Returns:
        dict: {attribute: coerced value} for every known key present

    Raises:
        ValidationError: One message per value that could not be coerced
    """
    if not isinstance(payload, dict):
        raise ValidationError(['Request body must be a JSON object'])

    values = {}
    errors = []
    for key, (attribute, coerce) in fields.items():
        if key not in payload:
            continue
        try:
            values[attribute] = coerce(payload[key])
        except (TypeError, ValueError, OverflowError) as e:
            errors.append(f'Invalid value for {key}: {e}')
    if errors:
        raise ValidationError(errors)
    return values


def apply_payload(instance, payload, fields):
    """Set coerced payload values on an existing model instance"""
    for attribute, value in parse_payload(payload, fields).items():
        setattr(instance, attribute, value)
    return instance


def user_to_dict(user):
    """Convert user model to dictionary (never includes secrets)"""
    return {
        '_id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'avatar': user.avatar or '',
        'isVerified': bool(user.is_verified),
        'loginMethod': user.login_method or 'local',
        'createdAt': format_timestamp(user.created_at),
        'updatedAt': format_timestamp(user.updated_at)
    }


def author_to_dict(user):
    if user is None:
        return None
    return {'_id': user.id, 'name': user.name, 'avatar': user.avatar or ''}


def blog_to_dict(blog):
    """Convert blog model to dictionary"""
    return {
        '_id': blog.id,
        'title': blog.title,
        'slug': blog.slug,
        'content': blog.content,
        'excerpt': blog.excerpt,
        'featuredImage': blog.featured_image or '',
        'author': author_to_dict(blog.author),
        'categories': blog.categories or [],
        'tags': blog.tags or [],
        'isPublished': bool(blog.is_published),
        'views': blog.views or 0,
        'readTime': blog.read_time,
        'createdAt': format_timestamp(blog.created_at),
        'updatedAt': format_timestamp(blog.updated_at)
    }


def project_to_dict(project):
    """Convert project model to dictionary"""
    return {
        '_id': project.id,
        'title': project.title,
        'description': project.description,
        'shortDescription': project.short_description,
        'images': project.images or [],
        'technologies': project.technologies or [],
        'liveUrl': project.live_url or '',
        'githubUrl': project.github_url or '',
        'category': project.category,
        'featured': bool(project.featured),
        'status': project.status,
        'startDate': _date(project.start_date),
        'endDate': _date(project.end_date),
        'createdAt': format_timestamp(project.created_at),
        'updatedAt': format_timestamp(project.updated_at)
    }


def course_to_dict(course):
    """Convert course model to dictionary"""
    return {
        '_id': course.id,
        'title': course.title,
        'description': course.description,
        'shortDescription': course.short_description,
        'thumbnail': course.thumbnail,
        'price': course.price,
        'duration': course.duration,
        'level': course.level,
        'category': course.category,
        'instructor': course.instructor,
        'rating': course.rating,
        'studentsEnrolled': course.students_enrolled,
        'lessons': course.lessons or [],
        'featured': bool(course.featured),
        'isPublished': bool(course.is_published),
        'createdAt': format_timestamp(course.created_at),
        'updatedAt': format_timestamp(course.updated_at)
    }


def contact_to_dict(contact):
    """Convert contact model to dictionary"""
    return {
        '_id': contact.id,
        'name': contact.name,
        'email': contact.email,
        'subject': contact.subject,
        'message': contact.message,
        'status': contact.status,
        'createdAt': format_timestamp(contact.created_at),
        'updatedAt': format_timestamp(contact.updated_at)
    }
