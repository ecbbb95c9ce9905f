import logging
from django.conf import settings

logger = logging.getLogger(__name__)


def normalize_email(email) -> str:
    return (email or "").strip().lower()


def admin_emails() -> set:
    return {
        normalize_email(e)
        for e in getattr(settings, "CONTRIBUTIONS_ADMIN_EMAILS", [])
        if normalize_email(e)
    }


def is_admin_email(email) -> bool:
    email = normalize_email(email)
    return bool(email) and email in admin_emails()


def user_can_view_all_contributions(user) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    email = getattr(user, "email", "")
    if not normalize_email(email):
        logger.warning("Admin access denied: user %s has no email", user.pk)
        return False
    allowed = is_admin_email(email)
    if not allowed:
        logger.warning("Admin access denied: %s is not in the admin allow-list", email)
    return allowed
