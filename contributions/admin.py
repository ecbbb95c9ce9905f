from django.contrib import admin
from .models import ContributionRecord

@admin.register(ContributionRecord)
class ContributionRecordAdmin(admin.ModelAdmin):
    list_display = ("email", "updated_at", "created_at")
    search_fields = ("email",)
