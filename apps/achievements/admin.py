from django.contrib import admin

from .models import Achievement, AchievementAward


@admin.register(Achievement)
class AchievementAdmin(admin.ModelAdmin):
    list_display = ['name', 'is_active', 'award_count', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']

    def award_count(self, obj):
        return obj.awards.count()
    award_count.short_description = 'Awards'


@admin.register(AchievementAward)
class AchievementAwardAdmin(admin.ModelAdmin):
    list_display = ['achievement', 'user', 'awarded_by', 'created_at']
    list_filter = ['achievement']
    search_fields = ['user__email', 'achievement__name']
    readonly_fields = ['created_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('achievement', 'user', 'awarded_by')
