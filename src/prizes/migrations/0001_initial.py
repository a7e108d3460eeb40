from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("regions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="GrandPrizeCriteria",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("name", models.CharField(max_length=200, verbose_name="nom")),
                ("criteria_type", models.CharField(choices=[("points", "Points"), ("deals", "Nombre de ventes"), ("combined", "Combine"), ("top_goals", "Meilleur buteur")], default="combined", max_length=20, verbose_name="type de critere")),
                ("region", models.CharField(blank=True, default="", max_length=20, verbose_name="region")),
                ("market_segment", models.CharField(blank=True, default="", max_length=20, verbose_name="segment de marche")),
                ("partner_category", models.CharField(blank=True, default="", max_length=50, verbose_name="categorie partenaire")),
                ("region_subcategory", models.CharField(blank=True, default="", max_length=100, verbose_name="sous-region")),
                ("min_points", models.PositiveIntegerField(blank=True, null=True, verbose_name="points minimum")),
                ("min_deals", models.PositiveIntegerField(blank=True, null=True, verbose_name="ventes minimum")),
                ("points_weight", models.PositiveSmallIntegerField(default=60, validators=[django.core.validators.MaxValueValidator(100)], verbose_name="poids des points (%)")),
                ("deals_weight", models.PositiveSmallIntegerField(default=40, validators=[django.core.validators.MaxValueValidator(100)], verbose_name="poids des ventes (%)")),
                ("start_date", models.DateTimeField(blank=True, null=True, verbose_name="debut de la periode")),
                ("end_date", models.DateTimeField(blank=True, null=True, verbose_name="fin de la periode")),
                ("redemption_start_date", models.DateTimeField(blank=True, null=True, verbose_name="debut de retrait")),
                ("redemption_end_date", models.DateTimeField(blank=True, null=True, verbose_name="fin de retrait")),
                ("ranking_position", models.PositiveSmallIntegerField(default=1, verbose_name="places primees")),
                ("prize_description", models.TextField(blank=True, default="", verbose_name="description du prix")),
                ("is_active", models.BooleanField(default=False, verbose_name="actif")),
            ],
            options={
                "verbose_name": "critere du grand prix",
                "verbose_name_plural": "criteres du grand prix",
                "ordering": ["-is_active", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="GrandPrizeWinner",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("points", models.IntegerField(verbose_name="points")),
                ("deals", models.IntegerField(verbose_name="ventes")),
                ("goals", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12, verbose_name="buts")),
                ("score", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="score")),
                ("rank", models.PositiveIntegerField(verbose_name="rang")),
                ("notes", models.TextField(blank=True, default="", verbose_name="notes")),
                ("criteria", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="winners", to="prizes.grandprizecriteria", verbose_name="critere")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="grand_prize_wins", to=settings.AUTH_USER_MODEL, verbose_name="gagnant")),
            ],
            options={
                "verbose_name": "gagnant du grand prix",
                "verbose_name_plural": "gagnants du grand prix",
                "ordering": ["criteria", "rank"],
            },
        ),
        migrations.CreateModel(
            name="MonthlyRegionPrize",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name="mois")),
                ("year", models.PositiveSmallIntegerField(verbose_name="annee")),
                ("rank", models.PositiveSmallIntegerField(default=1, verbose_name="rang")),
                ("prize_name", models.CharField(max_length=200, verbose_name="prix")),
                ("prize_description", models.TextField(blank=True, default="", verbose_name="description")),
                ("prize_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="valeur")),
                ("goal_target", models.PositiveIntegerField(verbose_name="objectif (buts)")),
                ("redemption_start_date", models.DateTimeField(blank=True, null=True, verbose_name="debut de retrait")),
                ("redemption_end_date", models.DateTimeField(blank=True, null=True, verbose_name="fin de retrait")),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                ("region_config", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="monthly_prizes", to="regions.regionconfig", verbose_name="configuration de region")),
            ],
            options={
                "verbose_name": "prix mensuel",
                "verbose_name_plural": "prix mensuels",
                "ordering": ["-year", "-month", "rank"],
            },
        ),
        migrations.AddConstraint(
            model_name="grandprizecriteria",
            constraint=models.UniqueConstraint(condition=models.Q(("is_active", True)), fields=("is_active",), name="single_active_grand_prize_criteria"),
        ),
        migrations.AddConstraint(
            model_name="grandprizewinner",
            constraint=models.UniqueConstraint(fields=("criteria", "user"), name="uniq_grand_prize_winner"),
        ),
        migrations.AddConstraint(
            model_name="monthlyregionprize",
            constraint=models.UniqueConstraint(fields=("region_config", "month", "year", "rank"), name="uniq_monthly_prize_rank"),
        ),
    ]
