from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, Dream, Analysis


class AnalysisInline(admin.StackedInline):
    model = Analysis
    extra = 0
    max_num = 1
    readonly_fields = ("prompt_sent", "raw_model_response", "insights", "model_version", "fallback_used", "created_at")


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("id", "email", "total_dreams", "analyses_used", "created_at")
    search_fields = ("email", "username")
    readonly_fields = ("total_dreams", "analyses_used")
    fieldsets = BaseUserAdmin.fieldsets + (("Stats", {"fields": ("total_dreams", "analyses_used")}),)


@admin.register(Dream)
class DreamAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "user", "date", "analysis")
    search_fields = ("user__email", "title")
    list_filter = ("date",)
    inlines = [AnalysisInline]


@admin.register(Analysis)
class AnalysisAdmin(admin.ModelAdmin):
    list_display = ("id", "dream", "user", "model_version", "fallback_used", "created_at")
    search_fields = ("user__email", "model_version")
    list_filter = ("fallback_used", "created_at")
