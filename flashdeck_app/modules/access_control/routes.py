from flask import jsonify, render_template
from flask_login import login_required, current_user

from flashdeck_app.models import Deck
from .logics.policies import get_role_policy, PolicyValues, PUBLIC_PLANS, LIMIT_DECKS
from .schemas import UserPermissionsSchema
from .services.permission_service import PermissionService
from . import access_control_bp


@access_control_bp.route('/api/access-control/permissions/me', methods=['GET'])
@login_required
def get_my_permissions():
    """
    Get current user's plan features and quota usage.
    """
    role = PermissionService.get_role(current_user)
    policy = get_role_policy(role)

    usage = {
        LIMIT_DECKS: Deck.query.filter_by(user_id=current_user.user_id).count(),
    }

    data = {
        'role': role,
        'label': policy.get('label', role),
        'permissions': policy.get('permissions', {}),
        'quotas': {}
    }
    for key, limit in policy.get('limits', {}).items():
        data['quotas'][key] = {
            'current': usage.get(key, 0),
            'limit': None if limit == PolicyValues.UNLIMITED else int(limit)
        }

    schema = UserPermissionsSchema()
    return jsonify(schema.dump(data))


@access_control_bp.route('/pricing')
def pricing():
    """List the available plans. Payment is handled outside this app."""
    plans = []
    for role in PUBLIC_PLANS:
        policy = get_role_policy(role)
        plans.append({
            'role': role,
            'label': policy.get('label', role),
            'permissions': policy.get('permissions', {}),
            'limits': policy.get('limits', {}),
        })

    current_role = PermissionService.get_role(current_user) if current_user.is_authenticated else None
    return render_template(
        'access_control/pricing.html',
        plans=plans,
        current_role=current_role,
        PolicyValues=PolicyValues,
    )
