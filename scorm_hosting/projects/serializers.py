from django.conf import settings
from rest_framework import serializers

from .models import Project


class ProjectSerializer(serializers.ModelSerializer):
    launch_url = serializers.ReadOnlyField()

    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "description",
            "launch_url",
            "package_manifest",
            "package_uploaded_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "package_manifest",
            "package_uploaded_at",
            "created_at",
            "updated_at",
        ]


class PackageUploadSerializer(serializers.Serializer):
    """
    Validates the multipart upload of a SCORM package.

    Fields:
        archiveFile: ZIP archive, at most SCORM_MAX_UPLOAD_SIZE bytes
        projectId: ID of the target project
    """

    archiveFile = serializers.FileField(allow_empty_file=False)
    projectId = serializers.CharField(max_length=64)

    def validate_archiveFile(self, value):
        if not value.name.lower().endswith(".zip"):
            raise serializers.ValidationError("Nur ZIP-Dateien sind erlaubt")
        max_size = settings.SCORM_MAX_UPLOAD_SIZE
        if value.size > max_size:
            raise serializers.ValidationError(
                f"Datei ist größer als {max_size // (1024 * 1024)} MB"
            )
        return value
