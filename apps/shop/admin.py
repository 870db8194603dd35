from django.contrib import admin
from django.utils.html import format_html

from .models import Item, MoneyTx, Purchase


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    """Ledger rows are immutable; the admin only reads them."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'price', 'rarity_badge', 'type', 'is_active', 'created_at']
    list_filter = ['is_active', 'rarity', 'type']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    actions = ['activate_items', 'deactivate_items']

    def rarity_badge(self, obj):
        colors = {
            'COMMON': '#6c757d',
            'UNCOMMON': '#28a745',
            'RARE': '#007bff',
            'EPIC': '#6f42c1',
            'LEGENDARY': '#fd7e14',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.rarity, '#6c757d'),
            obj.get_rarity_display(),
        )
    rarity_badge.short_description = 'Rarity'

    def activate_items(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} items put on sale.')
    activate_items.short_description = 'Put selected items on sale'

    def deactivate_items(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} items taken off sale.')
    deactivate_items.short_description = 'Take selected items off sale'


@admin.register(Purchase)
class PurchaseAdmin(ReadOnlyLedgerAdmin):
    list_display = ['user', 'item', 'price', 'request_id', 'created_at']
    list_filter = ['created_at']
    search_fields = ['user__email', 'item__name', 'request_id']
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'item')


@admin.register(MoneyTx)
class MoneyTxAdmin(ReadOnlyLedgerAdmin):
    list_display = ['user', 'type', 'amount', 'reason', 'created_at']
    list_filter = ['type', 'created_at']
    search_fields = ['user__email', 'reason', 'request_id']
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user')
