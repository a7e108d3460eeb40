import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("kind", models.CharField(choices=[("deal_approved", "Vente approuvee"), ("deal_rejected", "Vente rejetee"), ("points_adjusted", "Points ajustes"), ("info", "Information")], default="info", max_length=30, verbose_name="type")),
                ("level", models.CharField(choices=[("info", "Info"), ("success", "Succes"), ("warning", "Avertissement"), ("error", "Erreur")], default="info", max_length=10, verbose_name="niveau")),
                ("title", models.CharField(max_length=200, verbose_name="titre")),
                ("message", models.TextField(verbose_name="message")),
                ("payload", models.JSONField(blank=True, default=dict, verbose_name="donnees")),
                ("is_read", models.BooleanField(db_index=True, default=False, verbose_name="lue")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL, verbose_name="destinataire")),
            ],
            options={
                "verbose_name": "notification",
                "verbose_name_plural": "notifications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "is_read", "created_at"], name="notif_user_read_idx"),
                ],
            },
        ),
    ]
