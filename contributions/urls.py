from django.urls import path
from . import views

app_name = "contributions"

urlpatterns = [
    path("dashboard/", views.dashboard, name="dashboard"),
    path("admin-dashboard/", views.admin_dashboard, name="admin_dashboard"),
    path("admin-dashboard/export.csv", views.export_csv, name="export_csv"),
]
