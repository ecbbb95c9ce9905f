from django.shortcuts import render

from contributions.records import CATEGORIES


def home(request):
    return render(
        request,
        "home.html",
        {
            "active_nav": "home",
            "features": [label for _, label, _ in CATEGORIES],
        },
    )
