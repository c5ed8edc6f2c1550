from rest_framework import serializers
from .models import UserSettings


class UserSettingsSerializer(serializers.ModelSerializer):
    """Settings input and output. `is_default` is true until the user saves once."""

    is_default = serializers.BooleanField(read_only=True)

    class Meta:
        model = UserSettings
        fields = [
            'company_name',
            'company_address',
            'company_phone',
            'company_email',
            'company_vat_number',
            'logo',
            'footer_message',
            'tax_rate',
            'currency',
            'is_default',
        ]
        extra_kwargs = {
            'company_name': {'required': False, 'allow_blank': True},
            'company_address': {'required': False, 'allow_blank': True},
            'company_phone': {'required': False, 'allow_blank': True},
            'company_email': {'required': False, 'allow_blank': True},
            'company_vat_number': {'required': False, 'allow_blank': True},
            'logo': {'required': False, 'allow_blank': True},
            'footer_message': {'required': False, 'allow_blank': True},
            'tax_rate': {'required': False, 'min_value': 0, 'max_value': 1},
            'currency': {'required': False},
        }


class SettingsQuerySerializer(serializers.Serializer):
    exclude_logo = serializers.BooleanField(required=False, default=False)
