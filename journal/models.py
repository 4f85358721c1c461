# models.py
from uuid import uuid4

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    email = models.EmailField(unique=True)
    # stats.totalDreams / stats.analysesUsed, only ever changed with F() expressions
    total_dreams = models.IntegerField(default=0)
    analyses_used = models.IntegerField(default=0)

    def __str__(self):
        return self.email

    @property
    def stats(self):
        return {"totalDreams": self.total_dreams, "analysesUsed": self.analyses_used}


class Dream(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    user = models.ForeignKey("User", related_name="dreams", on_delete=models.CASCADE)
    title = models.CharField(max_length=255, blank=True, default="")
    body = models.TextField(blank=True, default="")
    date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    analysis = models.OneToOneField(
        "Analysis", related_name="linked_dream", on_delete=models.SET_NULL, null=True, blank=True
    )

    class Meta:
        ordering = ["-date"]
        indexes = [models.Index(fields=["user", "date"], name="dream_user_date_idx")]

    def __str__(self):
        return f"{self.title or 'Untitled'} • {self.date:%Y-%m-%d}"


class Analysis(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    user = models.ForeignKey("User", related_name="analyses", on_delete=models.CASCADE)
    dream = models.ForeignKey("Dream", related_name="analyses", on_delete=models.CASCADE)
    prompt_sent = models.TextField()
    raw_model_response = models.TextField(blank=True)
    insights = models.JSONField(default=dict)
    model_version = models.CharField(max_length=128)
    fallback_used = models.BooleanField(default=False)

    class Meta:
        verbose_name_plural = "analyses"
        indexes = [models.Index(fields=["user"], name="analysis_user_idx")]

    def __str__(self):
        return f"Analysis of {self.dream_id} ({self.model_version})"
