"""
Admin Bootstrap Script
Promotes an existing account to the admin role

Usage:
    python scripts/create_admin.py [email]

Without an email the oldest registered account is promoted.
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from utils.helpers import promote_to_admin


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    email = argv[0] if argv else None

    app = create_app()
    with app.app_context():
        user = promote_to_admin(email)
        promoted = user.email if user else None

    if promoted is None:
        target = email or 'any user'
        print(f"  Error: no account found for {target}. Please register first.")
        return 1

    print(f"  [OK] User {promoted} is now an admin")
    return 0


if __name__ == '__main__':
    sys.exit(main())
