# ==========================================
# apps/shop/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class ItemRarity(models.TextChoices):
    COMMON = 'COMMON', 'Common'
    UNCOMMON = 'UNCOMMON', 'Uncommon'
    RARE = 'RARE', 'Rare'
    EPIC = 'EPIC', 'Epic'
    LEGENDARY = 'LEGENDARY', 'Legendary'


class ItemType(models.TextChoices):
    COSMETIC = 'COSMETIC', 'Cosmetic'
    BOOST = 'BOOST', 'Boost'
    COLLECTIBLE = 'COLLECTIBLE', 'Collectible'


class MoneyTxType(models.TextChoices):
    EARNED = 'EARNED', 'Earned'
    SPENT = 'SPENT', 'Spent'
    REFUND = 'REFUND', 'Refund'
    GRANT = 'GRANT', 'Grant'


# Transaction types that add to a balance; everything else subtracts
CREDIT_TYPES = (MoneyTxType.EARNED, MoneyTxType.REFUND, MoneyTxType.GRANT)


class Item(models.Model):
    """Shop catalog entry."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    rarity = models.CharField(max_length=10, choices=ItemRarity.choices, default=ItemRarity.COMMON)
    type = models.CharField(max_length=12, choices=ItemType.choices, default=ItemType.COSMETIC)
    image_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        ordering = ['price', 'name']
        indexes = [
            models.Index(fields=['is_active', 'rarity'], name='item_active_rarity_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.price})"


class Purchase(models.Model):
    """
    Immutable purchase record.

    ``price`` is copied from the item at purchase time so later price
    changes never rewrite history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='purchases')
    item = models.ForeignKey(Item, on_delete=models.PROTECT, related_name='purchases')
    price = models.PositiveIntegerField()
    request_id = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'purchases'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'request_id'],
                condition=models.Q(request_id__isnull=False),
                name='unique_purchase_per_request',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'item', 'created_at'], name='purchase_user_item_idx'),
        ]

    def __str__(self):
        return f"{self.user} bought {self.item.name} for {self.price}"


class MoneyTx(models.Model):
    """
    Immutable money transaction.

    Amounts are always positive; ``type`` decides the sign. A user's balance
    is the replay of all their rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='money_txs')
    amount = models.PositiveIntegerField(validators=[MinValueValidator(0)])
    type = models.CharField(max_length=6, choices=MoneyTxType.choices)
    reason = models.CharField(max_length=255)
    request_id = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'money_txs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'type'], name='money_tx_user_type_idx'),
            models.Index(fields=['user', 'created_at'], name='money_tx_user_created_idx'),
        ]

    def __str__(self):
        sign = '+' if self.type in CREDIT_TYPES else '-'
        return f"{self.user} {sign}{self.amount} ({self.type})"

    @property
    def signed_amount(self):
        return self.amount if self.type in CREDIT_TYPES else -self.amount
