from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from .decorators import admin_required
from .exports import csv_download
from .records import CATEGORIES
from .rendering import OVERVIEW_TAB, TABS, build_sections, resolve_tab
from .service import fetch_contribution, list_contributions
from .store import open_store


@login_required
def dashboard(request):
    tab = resolve_tab(request.GET.get("tab"))
    with open_store() as store:
        contribution = fetch_contribution(store, request.user.email)
    sections = build_sections(contribution) if contribution else []
    ctx = {
        "active_nav": "dashboard",
        "contribution": contribution,
        "sections": sections,
        "active_section": next((s for s in sections if s.key == tab), None),
        "tabs": TABS,
        "active_tab": tab,
        "overview_tab": OVERVIEW_TAB,
    }
    return render(request, "contributions/dashboard.html", ctx)


@admin_required
def admin_dashboard(request):
    with open_store() as store:
        contributions = list_contributions(store)
    rows = [
        {
            "email": c.email,
            "cells": [c.text(key) for key, _, _ in CATEGORIES],
        }
        for c in contributions
    ]
    return render(
        request,
        "contributions/admin_dashboard.html",
        {
            "active_nav": "admin",
            "rows": rows,
            "columns": [label for _, label, _ in CATEGORIES],
        },
    )


@admin_required
def export_csv(request):
    with open_store() as store:
        contributions = list_contributions(store)
    return csv_download(contributions)
