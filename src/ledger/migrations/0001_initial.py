from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("deals", "0001_initial"),
        ("regions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PointsLedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("points", models.IntegerField(verbose_name="points")),
                ("description", models.CharField(max_length=255, verbose_name="description")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("deal", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="points_entries", to="deals.deal", verbose_name="vente")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="points_entries", to=settings.AUTH_USER_MODEL, verbose_name="vendeur")),
            ],
            options={
                "verbose_name": "ecriture de points",
                "verbose_name_plural": "ecritures de points",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="points_user_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="GoalsLedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("goals", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))], verbose_name="buts")),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name="mois")),
                ("year", models.PositiveSmallIntegerField(verbose_name="annee")),
                ("description", models.CharField(max_length=255, verbose_name="description")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("deal", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="goals_entries", to="deals.deal", verbose_name="vente")),
                ("region_config", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="goals_entries", to="regions.regionconfig", verbose_name="configuration de region")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="goals_entries", to=settings.AUTH_USER_MODEL, verbose_name="vendeur")),
            ],
            options={
                "verbose_name": "ecriture de buts",
                "verbose_name_plural": "ecritures de buts",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["year", "month"], name="goals_period_idx"),
                    models.Index(fields=["user", "year", "month"], name="goals_user_period_idx"),
                ],
            },
        ),
    ]
