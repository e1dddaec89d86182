"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import login_required, admin_required
from .notifications import (
    email_configured,
    send_email,
    send_email_async,
    notify_admin_of_contact
)
from .security import (
    get_client_ip,
    check_rate_limit,
    log_ip_activity,
    hash_password,
    verify_password,
    generate_token,
    decode_token
)
from .helpers import (
    get_json_body,
    paginate,
    promote_to_admin
)

__all__ = [
    # Decorators
    'login_required',
    'admin_required',

    # Notifications
    'email_configured',
    'send_email',
    'send_email_async',
    'notify_admin_of_contact',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'log_ip_activity',
    'hash_password',
    'verify_password',
    'generate_token',
    'decode_token',

    # Helpers
    'get_json_body',
    'paginate',
    'promote_to_admin'
]
