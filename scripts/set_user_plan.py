"""
Set a User's Plan

Billing happens outside Flashdeck; after a payment (or a refund) an operator
moves the account between plans with this script.

Run: python scripts/set_user_plan.py <username> <free|pro|admin>
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flashdeck_app import create_app
from flashdeck_app.models import User
from flashdeck_app.modules.access_control.interface import AccessControlInterface
from flashdeck_app.modules.access_control.logics.policies import ROLE_POLICIES


def set_user_plan(username, role):
    """Return True when the user exists and is now on ``role``."""
    user = User.query.filter_by(username=username).first()
    if user is None:
        print(f"✗ No user named {username!r}")
        return False

    AccessControlInterface.assign_role(user.user_id, role)
    print(f"✓ {username} is now on the {user.plan_label} plan")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Move a user to another plan.")
    parser.add_argument('username')
    parser.add_argument('role', choices=sorted(ROLE_POLICIES))
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        return 0 if set_user_plan(args.username, args.role) else 1


if __name__ == '__main__':
    sys.exit(main())
