from typing import Dict, Any

from flask import current_app, has_app_context

# --- Constants: Roles ---
ROLE_ADMIN = 'admin'
ROLE_PRO = 'pro'
ROLE_FREE = 'free'

# --- Constants: Feature Keys ---
FEATURE_AI_FLASHCARD_GENERATION = 'ai_flashcard_generation'
FEATURE_UNLIMITED_DECKS = 'unlimited_decks'

# --- Constants: Limit Keys ---
LIMIT_DECKS = 'limit_decks'
LIMIT_AI_CARDS_PER_REQUEST = 'limit_ai_cards_per_request'


class PolicyValues:
    """Helper for infinite limits"""
    UNLIMITED = float('inf')


# --- Policy Matrix ---
ROLE_POLICIES: Dict[str, Dict[str, Any]] = {
    ROLE_ADMIN: {
        'label': 'Admin',
        'permissions': {
            FEATURE_AI_FLASHCARD_GENERATION: True,
            FEATURE_UNLIMITED_DECKS: True,
        },
        'limits': {
            LIMIT_DECKS: PolicyValues.UNLIMITED,
            LIMIT_AI_CARDS_PER_REQUEST: 20,
        }
    },
    ROLE_PRO: {
        'label': 'Pro',
        'permissions': {
            FEATURE_AI_FLASHCARD_GENERATION: True,
            FEATURE_UNLIMITED_DECKS: True,
        },
        'limits': {
            LIMIT_DECKS: PolicyValues.UNLIMITED,
            LIMIT_AI_CARDS_PER_REQUEST: 20,
        }
    },
    ROLE_FREE: {
        'label': 'Free',
        'permissions': {
            FEATURE_AI_FLASHCARD_GENERATION: False,
            FEATURE_UNLIMITED_DECKS: False,
        },
        'limits': {
            LIMIT_DECKS: 3,
            LIMIT_AI_CARDS_PER_REQUEST: 0,
        }
    },
}

# Plans shown on the pricing page, cheapest first
PUBLIC_PLANS = (ROLE_FREE, ROLE_PRO)


def get_role_policy(role: str) -> Dict[str, Any]:
    """
    Retrieve policy for a specific role with fallback to FREE.
    Finite limits can be overridden from the app config.
    """
    base_policy = ROLE_POLICIES.get(role, ROLE_POLICIES[ROLE_FREE]).copy()

    # Copy limits to avoid mutating global state
    limits = base_policy.get('limits', {}).copy()

    # Naming Convention: QUOTA_{LIMIT_KEY}_{ROLE} (upper case)
    # Example: QUOTA_LIMIT_DECKS_FREE
    if has_app_context():
        for limit_key, default_val in limits.items():
            if default_val == PolicyValues.UNLIMITED:
                continue

            setting_key = f"QUOTA_{limit_key}_{role}".upper()
            dynamic_val = current_app.config.get(setting_key)

            if dynamic_val is not None:
                try:
                    limits[limit_key] = int(dynamic_val)
                except (ValueError, TypeError):
                    pass  # Keep default if invalid

    base_policy['limits'] = limits
    return base_policy
