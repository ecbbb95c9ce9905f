from .permissions import is_admin_email


def contributions_nav(request):
    user = getattr(request, "user", None)
    return {
        "can_view_all_contributions": bool(
            user is not None
            and user.is_authenticated
            and is_admin_email(user.email)
        ),
    }
