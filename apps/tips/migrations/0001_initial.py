# Generated manually for tips and webhook logs

import uuid
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('venues', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Tip',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('PERSONAL', 'Personal'), ('POOL', 'Pool')], max_length=20)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid'), ('FAILED', 'Failed')], default='PENDING', max_length=20)),
                ('amount', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('platform_fee', models.PositiveIntegerField()),
                ('net_amount', models.PositiveIntegerField()),
                ('total_amount', models.PositiveIntegerField()),
                ('guest_pays_fee', models.BooleanField(default=False)),
                ('currency', models.CharField(default='IDR', max_length=3)),
                ('order_id', models.CharField(max_length=64, unique=True)),
                ('snap_token', models.CharField(blank=True, max_length=255)),
                ('payment_type', models.CharField(blank=True, max_length=50)),
                ('gateway_status', models.CharField(blank=True, max_length=30)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('qr_code', models.ForeignKey(on_delete=django.db.models.deletion.RESTRICT, related_name='tips', to='venues.qrcode')),
                ('staff', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tips', to='venues.staff')),
                ('venue', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tips', to='venues.venue')),
            ],
            options={
                'db_table': 'tips',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['venue', 'status', 'created_at'], name='tips_venue_status_idx'),
                    models.Index(fields=['status', 'created_at'], name='tips_status_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='WebhookLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_id', models.CharField(db_index=True, max_length=64)),
                ('transaction_status', models.CharField(blank=True, max_length=30)),
                ('fraud_status', models.CharField(blank=True, max_length=30)),
                ('payload', models.JSONField(default=dict)),
                ('signature_valid', models.BooleanField(default=False)),
                ('processed', models.BooleanField(default=False)),
                ('error', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'webhook_logs',
                'ordering': ['-created_at'],
            },
        ),
    ]
