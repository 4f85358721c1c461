from rest_framework import serializers
from .models import Analysis, Dream


class AnalysisSerializer(serializers.ModelSerializer):
    dreamId = serializers.UUIDField(source="dream_id", read_only=True)
    promptSent = serializers.CharField(source="prompt_sent", read_only=True)
    rawModelResponse = serializers.CharField(source="raw_model_response", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    modelVersion = serializers.CharField(source="model_version", read_only=True)
    fallbackUsed = serializers.BooleanField(source="fallback_used", read_only=True)

    class Meta:
        model = Analysis
        fields = ("id", "dreamId", "promptSent", "rawModelResponse", "insights", "createdAt", "modelVersion", "fallbackUsed")
        read_only_fields = fields


class DreamSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    analysisId = serializers.UUIDField(source="analysis_id", read_only=True)

    class Meta:
        model = Dream
        fields = ("id", "title", "body", "date", "createdAt", "updatedAt", "analysisId")


class DreamExportSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Dream
        fields = ("title", "body", "date", "createdAt")
