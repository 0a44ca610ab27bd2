from rest_framework import serializers

from apps.venues.models import VenueType
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'phone',
            'display_name',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class RegistrationSerializer(serializers.Serializer):
    """Validate manager + venue registration input."""

    email = serializers.EmailField(error_messages={'invalid': 'Invalid email address'})
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'},
        error_messages={'min_length': 'Password must be at least 6 characters'},
    )
    venue_name = serializers.CharField(
        min_length=2,
        max_length=200,
        error_messages={'min_length': 'Venue name must be at least 2 characters'},
    )
    venue_type = serializers.ChoiceField(choices=VenueType.choices)
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
