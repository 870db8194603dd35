import uuid
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('description', models.TextField(blank=True)),
                ('price', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('rarity', models.CharField(choices=[('COMMON', 'Common'), ('UNCOMMON', 'Uncommon'), ('RARE', 'Rare'), ('EPIC', 'Epic'), ('LEGENDARY', 'Legendary')], default='COMMON', max_length=10)),
                ('type', models.CharField(choices=[('COSMETIC', 'Cosmetic'), ('BOOST', 'Boost'), ('COLLECTIBLE', 'Collectible')], default='COSMETIC', max_length=12)),
                ('image_url', models.URLField(blank=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'items',
                'ordering': ['price', 'name'],
                'indexes': [models.Index(fields=['is_active', 'rarity'], name='item_active_rarity_idx')],
            },
        ),
        migrations.CreateModel(
            name='MoneyTx',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ('type', models.CharField(choices=[('EARNED', 'Earned'), ('SPENT', 'Spent'), ('REFUND', 'Refund'), ('GRANT', 'Grant')], max_length=6)),
                ('reason', models.CharField(max_length=255)),
                ('request_id', models.CharField(blank=True, max_length=64, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='money_txs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'money_txs',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'type'], name='money_tx_user_type_idx'),
                    models.Index(fields=['user', 'created_at'], name='money_tx_user_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('price', models.PositiveIntegerField()),
                ('request_id', models.CharField(blank=True, max_length=64, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='shop.item')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='purchases', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'purchases',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'item', 'created_at'], name='purchase_user_item_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('request_id__isnull', False)), fields=('user', 'request_id'), name='unique_purchase_per_request')],
            },
        ),
    ]
