"""
Subscription plan limits.

Self-registered tenants always start on the free plan.
"""

from typing import Dict

from .enums import SubscriptionPlan

PLAN_LIMITS: Dict[SubscriptionPlan, Dict[str, int]] = {
    SubscriptionPlan.free: {"max_users": 5, "max_projects": 3},
    SubscriptionPlan.pro: {"max_users": 25, "max_projects": 15},
    SubscriptionPlan.enterprise: {"max_users": 100, "max_projects": 50},
}


def limits_for(plan: SubscriptionPlan) -> Dict[str, int]:
    return dict(PLAN_LIMITS[plan])
