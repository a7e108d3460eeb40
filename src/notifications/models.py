from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Notification(TimeStampedModel):
    """In-app notification shown to a seller."""

    class Kind(models.TextChoices):
        DEAL_APPROVED = "deal_approved", "Vente approuvee"
        DEAL_REJECTED = "deal_rejected", "Vente rejetee"
        POINTS_ADJUSTED = "points_adjusted", "Points ajustes"
        INFO = "info", "Information"

    class Level(models.TextChoices):
        INFO = "info", "Info"
        SUCCESS = "success", "Succes"
        WARNING = "warning", "Avertissement"
        ERROR = "error", "Erreur"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name="destinataire",
    )
    kind = models.CharField("type", max_length=30, choices=Kind.choices, default=Kind.INFO)
    level = models.CharField("niveau", max_length=10, choices=Level.choices, default=Level.INFO)
    title = models.CharField("titre", max_length=200)
    message = models.TextField("message")
    payload = models.JSONField("donnees", default=dict, blank=True)
    is_read = models.BooleanField("lue", default=False, db_index=True)

    class Meta:
        verbose_name = "notification"
        verbose_name_plural = "notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read", "created_at"], name="notif_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.title} -> {self.user}"
