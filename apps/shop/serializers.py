from rest_framework import serializers

from .models import Item, ItemRarity, ItemType, MoneyTx, Purchase


class ItemSerializer(serializers.ModelSerializer):

    class Meta:
        model = Item
        fields = [
            'id', 'name', 'description', 'price', 'rarity', 'type',
            'image_url', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']


class ItemCreateSerializer(serializers.Serializer):
    """Input for a new catalog item (operator only)."""

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    price = serializers.IntegerField(min_value=1, max_value=1000000)
    rarity = serializers.ChoiceField(choices=ItemRarity.choices, default=ItemRarity.COMMON)
    type = serializers.ChoiceField(choices=ItemType.choices, default=ItemType.COSMETIC)
    image_url = serializers.URLField(required=False, allow_blank=True, default='')
    is_active = serializers.BooleanField(default=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank")
        return value


class ItemMinimalSerializer(serializers.ModelSerializer):

    class Meta:
        model = Item
        fields = ['id', 'name', 'rarity', 'type', 'image_url']


class PurchaseSerializer(serializers.ModelSerializer):
    item = ItemMinimalSerializer(read_only=True)

    class Meta:
        model = Purchase
        fields = ['id', 'item', 'price', 'request_id', 'created_at']
        read_only_fields = fields


class MoneyTxSerializer(serializers.ModelSerializer):

    class Meta:
        model = MoneyTx
        fields = ['id', 'user', 'amount', 'type', 'reason', 'request_id', 'created_at']
        read_only_fields = fields


class ShopOverviewSerializer(serializers.Serializer):
    items = ItemSerializer(many=True)
    balance = serializers.IntegerField()


class BuyItemSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()


class PurchaseResultSerializer(serializers.Serializer):
    purchase = PurchaseSerializer()
    balance = serializers.IntegerField()
    duplicate = serializers.BooleanField()
