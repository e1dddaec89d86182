from extensions import db
from datetime import datetime, timezone
from flask_login import UserMixin
from sqlalchemy import JSON
import re
import uuid

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

USER_ROLES = ('user', 'admin')
PROJECT_CATEGORIES = ('web', 'mobile', '3d', 'design', 'other')
PROJECT_STATUSES = ('completed', 'in-progress', 'planned')
COURSE_LEVELS = ('beginner', 'intermediate', 'advanced')
CONTACT_STATUSES = ('new', 'read', 'replied')


def utcnow():
    """Naive UTC timestamp, comparable with values read back from SQLite"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id():
    return str(uuid.uuid4())


def slugify(title):
    """Build a URL slug from a title"""
    slug = (title or '').lower()
    slug = re.sub(r'[^a-z0-9 -]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    return re.sub(r'-+', '-', slug)


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class ValidationError(ValueError):
    """Raised when a document fails field validation"""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(', '.join(self.errors))


class ValidatedMixin:
    """Required-field and constraint checks run before a commit"""

    # {attribute: message shown when the attribute is blank}
    __required__ = {}

    def __init__(self, **kwargs):
        # Scalar column defaults normally only apply on flush
        for column in self.__table__.columns:
            default = column.default
            if column.key not in kwargs and default is not None and default.is_scalar:
                kwargs[column.key] = default.arg
        super().__init__(**kwargs)

    def validation_errors(self):
        errors = [
            message for field, message in self.__required__.items()
            if _is_blank(getattr(self, field))
        ]
        errors.extend(self.constraint_errors())
        return errors

    def constraint_errors(self):
        return []

    def validate(self):
        errors = self.validation_errors()
        if errors:
            raise ValidationError(errors)
        return self


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _too_long(value, limit):
    return value is not None and len(value) > limit


class User(UserMixin, ValidatedMixin, db.Model):
    __tablename__ = 'users'
    __required__ = {
        'name': 'Please add a name',
        'email': 'Please add an email',
    }

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255))
    role = db.Column(db.String(20), default='user', nullable=False)
    avatar = db.Column(db.String(500), default='')
    google_id = db.Column(db.String(255), unique=True)
    login_method = db.Column(db.String(20), default='local')
    is_verified = db.Column(db.Boolean, default=False)
    verification_token = db.Column(db.String(64), index=True)
    verification_expire = db.Column(db.DateTime)
    reset_password_token = db.Column(db.String(64), index=True)
    reset_password_expire = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    blogs = db.relationship('Blog', backref='author', lazy=True, cascade='all, delete-orphan')

    @property
    def is_admin(self):
        return self.role == 'admin'

    def constraint_errors(self):
        errors = []
        if self.email and not EMAIL_PATTERN.match(self.email):
            errors.append('Please add a valid email')
        if self.role not in USER_ROLES:
            errors.append(f'{self.role} is not a valid role')
        return errors


class Blog(ValidatedMixin, db.Model):
    __tablename__ = 'blogs'
    __required__ = {
        'title': 'Please add a title',
        'content': 'Please add content',
        'excerpt': 'Please add an excerpt',
        'author_id': 'Blog author is required',
        'categories': 'Please add at least one category',
    }

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.String(300), nullable=False)
    featured_image = db.Column(db.String(500), default='')
    author_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    categories = db.Column(SafeJSON, default=list)
    tags = db.Column(SafeJSON, default=list)
    is_published = db.Column(db.Boolean, default=False)
    views = db.Column(db.Integer, default=0)
    read_time = db.Column(db.Integer, default=5)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def ensure_slug(self):
        if self.title and not self.slug:
            self.slug = slugify(self.title)
        return self.slug

    def constraint_errors(self):
        errors = []
        if _too_long(self.title, 200):
            errors.append('Title cannot be more than 200 characters')
        if _too_long(self.excerpt, 300):
            errors.append('Excerpt cannot be more than 300 characters')
        if self.title and not self.slug:
            errors.append('Title must contain at least one letter or number')
        return errors


class Project(ValidatedMixin, db.Model):
    __tablename__ = 'projects'
    __required__ = {
        'title': 'Please add a project title',
        'description': 'Please add a description',
        'short_description': 'Please add a short description',
        'technologies': 'Please add at least one technology',
        'category': 'Please add a category',
    }

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    short_description = db.Column(db.String(150), nullable=False)
    images = db.Column(SafeJSON, default=list)
    technologies = db.Column(SafeJSON, default=list)
    live_url = db.Column(db.String(500))
    github_url = db.Column(db.String(500))
    category = db.Column(db.String(20), nullable=False)
    featured = db.Column(db.Boolean, default=False)
    status = db.Column(db.String(20), default='completed')
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def constraint_errors(self):
        errors = []
        if _too_long(self.short_description, 150):
            errors.append('Short description cannot be more than 150 characters')
        if self.category and self.category not in PROJECT_CATEGORIES:
            errors.append(f'{self.category} is not a valid category')
        if self.status not in PROJECT_STATUSES:
            errors.append(f'{self.status} is not a valid status')
        return errors


class Course(ValidatedMixin, db.Model):
    __tablename__ = 'courses'
    __required__ = {
        'title': 'Please add a course title',
        'description': 'Please add a description',
        'short_description': 'Please add a short description',
        'thumbnail': 'Please add a thumbnail',
        'price': 'Please add a price',
        'duration': 'Please add a duration',
        'level': 'Please add a level',
        'category': 'Please add a category',
        'instructor': 'Please add an instructor',
    }

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    short_description = db.Column(db.String(200), nullable=False)
    thumbnail = db.Column(db.String(500), nullable=False)
    price = db.Column(db.Float, nullable=False, default=0)
    duration = db.Column(db.String(100), nullable=False)
    level = db.Column(db.String(20), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    instructor = db.Column(db.String(255), nullable=False, default='Your Name')
    rating = db.Column(db.Float, default=0)
    students_enrolled = db.Column(db.Integer, default=0)
    lessons = db.Column(SafeJSON, default=list)  # [{title, duration, videoUrl, description}]
    featured = db.Column(db.Boolean, default=False)
    is_published = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def constraint_errors(self):
        errors = []
        if _too_long(self.short_description, 200):
            errors.append('Short description cannot be more than 200 characters')
        if self.level and self.level not in COURSE_LEVELS:
            errors.append(f'{self.level} is not a valid level')
        if self.price is not None and self.price < 0:
            errors.append('Price cannot be negative')
        if self.rating is not None and not 0 <= self.rating <= 5:
            errors.append('Rating must be between 0 and 5')
        for lesson in self.lessons or []:
            if not isinstance(lesson, dict):
                errors.append('Each lesson must be an object')
                break
        return errors


class Contact(ValidatedMixin, db.Model):
    __tablename__ = 'contacts'
    __required__ = {
        'name': 'Please add a name',
        'email': 'Please add an email',
        'subject': 'Please add a subject',
        'message': 'Please add a message',
    }

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), default='new')
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def constraint_errors(self):
        errors = []
        if self.email and not EMAIL_PATTERN.match(self.email):
            errors.append('Please add a valid email')
        if self.status not in CONTACT_STATUSES:
            errors.append(f'{self.status} is not a valid status')
        return errors
