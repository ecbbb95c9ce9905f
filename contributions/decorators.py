from functools import wraps
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect
from .permissions import user_can_view_all_contributions


def admin_required(view_func):
    """
    Guard views that expose every user's contributions.
    Anonymous callers go to the login page; signed-in users who are not
    allow-listed go back to their own dashboard.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not user_can_view_all_contributions(request.user):
            if request.user.is_authenticated:
                # allauth bounces signed-in users to ?next=, so never send it here
                return redirect("contributions:dashboard")
            return redirect_to_login(request.get_full_path())
        return view_func(request, *args, **kwargs)
    return _wrapped
