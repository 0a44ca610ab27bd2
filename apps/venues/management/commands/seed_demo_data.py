"""
Management command to create a demo venue for trying the tipping flow.

Usage:
    python manage.py seed_demo_data
    python manage.py seed_demo_data --clear

This creates:
- 1 platform admin and 1 venue manager
- 1 active venue connected to the Midtrans sandbox
- 3 staff members, each with a personal QR code
- 1 table QR code and 1 venue-wide QR code

Short codes are fixed so the demo URLs stay stable between runs.
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decouple import config

from apps.accounts.models import User, UserRole
from apps.venues.models import (
    Venue, VenueStatus, VenueType, DistributionMode, GatewayEnvironment,
    Staff, StaffRole, QrCode, QrType,
)
from apps.venues.services import build_tip_url

DEMO_VENUE_NAME = 'Cafe Organic Canggu'

DEMO_STAFF = [
    # (display_name, full_name, role, short_code)
    ('Agung', 'I Made Agung', StaffRole.BARISTA, 'agung001'),
    ('Wayan', 'I Wayan Sudarma', StaffRole.WAITER, 'wayan001'),
    ('Ketut', 'Ni Ketut Sari', StaffRole.BARTENDER, 'ketut001'),
]

DEMO_QR_CODES = [
    # (short_code, type, label)
    ('table01', QrType.TABLE, 'Table 1'),
    ('organic', QrType.VENUE, 'Front counter'),
]


class Command(BaseCommand):
    help = 'Create a demo venue with staff and QR codes'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete the demo venue before creating it again',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing demo data...')
            self.clear_data()

        self.stdout.write('Creating demo data...')

        users = self.create_users()
        venue = self.create_venue(users['manager'])
        self.create_staff(venue)
        self.create_qr_codes(venue)

        self.stdout.write(self.style.SUCCESS('Demo data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Accounts:')
        self.stdout.write('  admin@tipme.local / admin123 (platform admin)')
        self.stdout.write('  manager@tipme.local / manager123 (venue manager)')
        self.stdout.write('')
        self.stdout.write('Tip pages:')
        for qr_code in venue.qr_codes.order_by('type', 'short_code'):
            self.stdout.write(f'  {qr_code.type:<8} {build_tip_url(qr_code.short_code)}')

    def clear_data(self):
        """Remove the demo venue and everything hanging off it."""
        Venue.objects.filter(name=DEMO_VENUE_NAME).delete()
        User.objects.filter(email__in=['admin@tipme.local', 'manager@tipme.local']).delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@tipme.local',
            defaults={
                'display_name': 'Platform Admin',
                'role': UserRole.ADMIN,
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        manager, _ = User.objects.get_or_create(
            email='manager@tipme.local',
            defaults={
                'display_name': 'Demo Manager',
                'role': UserRole.MANAGER,
            }
        )
        manager.set_password('manager123')
        manager.save()

        return {'admin': admin, 'manager': manager}

    def create_venue(self, manager):
        self.stdout.write('  Creating venue...')

        venue, _ = Venue.objects.update_or_create(
            name=DEMO_VENUE_NAME,
            manager=manager,
            defaults={
                'type': VenueType.CAFE,
                'address': 'Jl. Batu Mejan, Canggu, Bali',
                'status': VenueStatus.ACTIVE,
                'distribution_mode': DistributionMode.POOLED,
                'allow_staff_choice': True,
                'midtrans_connected': True,
                'midtrans_merchant_id': config('DEMO_MIDTRANS_MERCHANT_ID', default='G000000000'),
                'midtrans_server_key': config('DEMO_MIDTRANS_SERVER_KEY', default='SB-Mid-server-demo'),
                'midtrans_client_key': config('DEMO_MIDTRANS_CLIENT_KEY', default='SB-Mid-client-demo'),
                'midtrans_environment': GatewayEnvironment.SANDBOX,
            }
        )
        return venue

    def create_staff(self, venue):
        self.stdout.write('  Creating staff...')

        for display_name, full_name, role, short_code in DEMO_STAFF:
            staff, _ = Staff.objects.get_or_create(
                venue=venue,
                display_name=display_name,
                defaults={'full_name': full_name, 'role': role},
            )
            QrCode.objects.get_or_create(
                short_code=short_code,
                defaults={
                    'venue': venue,
                    'staff': staff,
                    'type': QrType.PERSONAL,
                    'label': display_name,
                }
            )

    def create_qr_codes(self, venue):
        self.stdout.write('  Creating QR codes...')

        for short_code, qr_type, label in DEMO_QR_CODES:
            QrCode.objects.get_or_create(
                short_code=short_code,
                defaults={'venue': venue, 'type': qr_type, 'label': label},
            )
