from rest_framework import serializers
from .models import Group


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    people_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'people_count',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def get_people_count(self, obj):
        """Get number of people tagged with the group."""
        return obj.people.count()


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    class Meta:
        model = Group
        fields = ['name']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Group name cannot be blank')
        return value
