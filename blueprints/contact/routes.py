"""
Contact Routes - Public contact form and admin inbox
"""

from flask import jsonify, current_app
from flask_login import current_user
from extensions import db
from models import Contact, CONTACT_STATUSES
from utils.data import contact_to_dict
from utils.decorators import admin_required
from utils.helpers import find_or_none, get_json_body, paginate
from utils.notifications import notify_admin_of_contact
from utils.security import log_ip_activity
from . import contact_bp

DEFAULT_LIMIT = 10


def _not_found():
    return jsonify({'success': False, 'message': 'Contact not found'}), 404


@contact_bp.route('/', methods=['POST'], strict_slashes=False)
def submit_contact():
    """Store a contact form submission and notify the site owner"""
    data = get_json_body()
    fields = {}
    for key in ('name', 'email', 'subject', 'message'):
        value = data.get(key)
        fields[key] = value.strip() if isinstance(value, str) else ''

    if not all(fields.values()):
        return jsonify({'success': False, 'message': 'Please fill in all fields'}), 400

    contact = Contact(**fields)
    contact.validate()
    db.session.add(contact)
    db.session.commit()

    log_ip_activity('contact_submitted', f"From: {contact.email}")
    notify_admin_of_contact(contact)

    return jsonify({
        'success': True,
        'data': contact_to_dict(contact),
        'message': 'Message sent successfully! We will get back to you soon.'
    }), 201


@contact_bp.route('/', methods=['GET'], strict_slashes=False)
@admin_required
def list_contacts():
    query = db.select(Contact).order_by(Contact.created_at.desc())
    contacts, pagination = paginate(query, 'totalContacts', DEFAULT_LIMIT)

    return jsonify({
        'success': True,
        'data': {
            'contacts': [contact_to_dict(contact) for contact in contacts],
            'pagination': pagination
        }
    })


@contact_bp.route('/<contact_id>/status', methods=['PUT'])
@admin_required
def update_contact_status(contact_id):
    status = get_json_body().get('status')
    if status not in CONTACT_STATUSES:
        return jsonify({'success': False, 'message': 'Invalid status'}), 400

    contact = find_or_none(Contact, contact_id)
    if not contact:
        return _not_found()

    contact.status = status
    db.session.commit()

    return jsonify({
        'success': True,
        'data': contact_to_dict(contact),
        'message': 'Status updated successfully'
    })


@contact_bp.route('/<contact_id>', methods=['DELETE'])
@admin_required
def delete_contact(contact_id):
    contact = find_or_none(Contact, contact_id)
    if not contact:
        return _not_found()

    db.session.delete(contact)
    db.session.commit()

    current_app.logger.info(f"Contact deleted: {contact_id} by {current_user.email}")
    return jsonify({'success': True, 'message': 'Contact message deleted successfully'})
