# Generated manually for payouts and tip allocations

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('venues', '0001_initial'),
        ('tips', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payout',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('period_start', models.DateField()),
                ('period_end', models.DateField()),
                ('total_amount', models.PositiveIntegerField(default=0)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid')], default='PENDING', max_length=20)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('venue', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payouts', to='venues.venue')),
            ],
            options={
                'db_table': 'payouts',
                'ordering': ['-period_end'],
            },
        ),
        migrations.CreateModel(
            name='TipAllocation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.PositiveIntegerField()),
                ('date', models.DateField()),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid')], default='PENDING', max_length=20)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('payout', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='allocations', to='payouts.payout')),
                ('staff', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='venues.staff')),
                ('tip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='tips.tip')),
            ],
            options={
                'db_table': 'tip_allocations',
                'ordering': ['-date'],
            },
        ),
        migrations.AddConstraint(
            model_name='payout',
            constraint=models.UniqueConstraint(fields=('venue', 'period_start', 'period_end'), name='unique_payout_period_per_venue'),
        ),
        migrations.AddConstraint(
            model_name='tipallocation',
            constraint=models.UniqueConstraint(fields=('tip', 'staff'), name='unique_allocation_per_tip_staff'),
        ),
        migrations.AddIndex(
            model_name='tipallocation',
            index=models.Index(fields=['staff', 'date'], name='allocations_staff_date_idx'),
        ),
    ]
