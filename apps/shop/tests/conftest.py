import pytest

from apps.shop.models import Item, ItemRarity, MoneyTx, MoneyTxType


@pytest.fixture
def sticker(db):
    """Cheap common item."""
    return Item.objects.create(name='Sticker', price=30, rarity=ItemRarity.COMMON)


@pytest.fixture
def golden_pen(db):
    return Item.objects.create(name='Golden Pen', price=80, rarity=ItemRarity.LEGENDARY)


@pytest.fixture
def retired_item(db):
    return Item.objects.create(name='Old Badge', price=10, is_active=False)


@pytest.fixture
def funded_student(db, student):
    """Student who earned 100 coins from a job."""
    MoneyTx.objects.create(
        user=student,
        amount=100,
        type=MoneyTxType.EARNED,
        reason='Job completion: Clean the lab',
    )
    return student
