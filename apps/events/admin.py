from django.contrib import admin

from .models import Event, EventParticipation


class EventParticipationInline(admin.TabularInline):
    model = EventParticipation
    extra = 0
    fields = ['user', 'request_id', 'created_at']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['title', 'starts_at', 'ends_at', 'xp_bonus', 'rarity_reward', 'is_active']
    list_filter = ['is_active', 'rarity_reward', 'starts_at']
    search_fields = ['title', 'description']
    readonly_fields = ['created_by', 'created_at', 'updated_at']
    inlines = [EventParticipationInline]
    date_hierarchy = 'starts_at'

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
