# Generated manually for venues, staff and QR codes

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Venue',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('type', models.CharField(choices=[('RESTAURANT', 'Restaurant'), ('CAFE', 'Cafe'), ('BAR', 'Bar'), ('COFFEE_SHOP', 'Coffee shop'), ('OTHER', 'Other')], default='OTHER', max_length=20)),
                ('address', models.CharField(blank=True, max_length=300)),
                ('phone', models.CharField(blank=True, max_length=32)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('logo_url', models.URLField(blank=True)),
                ('timezone', models.CharField(default='Asia/Makassar', max_length=64)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('ACTIVE', 'Active'), ('BLOCKED', 'Blocked')], default='DRAFT', max_length=20)),
                ('distribution_mode', models.CharField(choices=[('PERSONAL', 'Personal'), ('POOLED', 'Pooled')], default='PERSONAL', max_length=20)),
                ('allow_staff_choice', models.BooleanField(default=False)),
                ('midtrans_connected', models.BooleanField(default=False)),
                ('midtrans_merchant_id', models.CharField(blank=True, max_length=100)),
                ('midtrans_server_key', models.CharField(blank=True, max_length=200)),
                ('midtrans_client_key', models.CharField(blank=True, max_length=200)),
                ('midtrans_environment', models.CharField(choices=[('sandbox', 'Sandbox'), ('production', 'Production')], default='sandbox', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('manager', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='managed_venues', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'venues',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='venues_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Staff',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('display_name', models.CharField(max_length=100)),
                ('full_name', models.CharField(blank=True, max_length=200)),
                ('role', models.CharField(choices=[('WAITER', 'Waiter'), ('BARTENDER', 'Bartender'), ('BARISTA', 'Barista'), ('HOSTESS', 'Hostess'), ('OTHER', 'Other')], default='OTHER', max_length=20)),
                ('avatar_url', models.URLField(blank=True)),
                ('participates_in_pool', models.BooleanField(default=True)),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive')], default='ACTIVE', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='staff_profile', to=settings.AUTH_USER_MODEL)),
                ('venue', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='staff', to='venues.venue')),
            ],
            options={
                'db_table': 'staff',
                'verbose_name_plural': 'staff',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['venue', 'status'], name='staff_venue_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='QrCode',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('short_code', models.CharField(max_length=32, unique=True)),
                ('type', models.CharField(choices=[('PERSONAL', 'Personal'), ('TABLE', 'Table'), ('VENUE', 'Venue')], max_length=20)),
                ('label', models.CharField(blank=True, max_length=100)),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive')], default='ACTIVE', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('staff', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='qr_code', to='venues.staff')),
                ('venue', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='qr_codes', to='venues.venue')),
            ],
            options={
                'db_table': 'qr_codes',
                'ordering': ['type', '-created_at'],
                'indexes': [
                    models.Index(fields=['venue', 'type'], name='qr_codes_venue_type_idx'),
                ],
            },
        ),
    ]
