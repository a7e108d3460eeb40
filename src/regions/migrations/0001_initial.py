import django.core.validators
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
            name="RegionConfig",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("name", models.CharField(max_length=150, verbose_name="nom")),
                ("region", models.CharField(choices=[("NOLA", "NOLA"), ("SOLA", "SOLA"), ("BRASIL", "Brasil"), ("MEXICO", "Mexico")], max_length=20, verbose_name="region")),
                ("category", models.CharField(choices=[("ENTERPRISE", "Enterprise"), ("SMB", "SMB"), ("MSSP", "MSSP")], max_length=20, verbose_name="segment de marche")),
                ("subcategory", models.CharField(blank=True, default="", max_length=100, verbose_name="sous-categorie")),
                ("new_customer_goal_rate", models.PositiveIntegerField(default=1000, validators=[django.core.validators.MinValueValidator(1)], verbose_name="montant par but (nouveau client)")),
                ("renewal_goal_rate", models.PositiveIntegerField(default=2000, validators=[django.core.validators.MinValueValidator(1)], verbose_name="montant par but (renouvellement)")),
                ("monthly_goal_target", models.PositiveIntegerField(blank=True, null=True, verbose_name="objectif mensuel (buts)")),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                ("expiration_date", models.DateField(blank=True, null=True, verbose_name="date d'expiration")),
            ],
            options={
                "verbose_name": "configuration de region",
                "verbose_name_plural": "configurations de region",
                "ordering": ["region", "category", "subcategory"],
            },
        ),
        migrations.CreateModel(
            name="PointsConfig",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("region", models.CharField(choices=[("NOLA", "NOLA"), ("SOLA", "SOLA"), ("BRASIL", "Brasil"), ("MEXICO", "Mexico")], max_length=20, verbose_name="region")),
                ("new_customer_rate", models.PositiveIntegerField(default=1000, validators=[django.core.validators.MinValueValidator(1)], verbose_name="montant par point (nouveau client)")),
                ("renewal_rate", models.PositiveIntegerField(default=2000, validators=[django.core.validators.MinValueValidator(1)], verbose_name="montant par point (renouvellement)")),
                ("grand_prize_threshold", models.PositiveIntegerField(default=50000, verbose_name="seuil grand prix")),
                ("is_active", models.BooleanField(default=True, verbose_name="actif")),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="modifie par")),
            ],
            options={
                "verbose_name": "bareme de points",
                "verbose_name_plural": "baremes de points",
                "ordering": ["region"],
            },
        ),
        migrations.AddConstraint(
            model_name="regionconfig",
            constraint=models.UniqueConstraint(fields=("region", "category", "subcategory"), name="uniq_region_config_key"),
        ),
        migrations.AddConstraint(
            model_name="pointsconfig",
            constraint=models.UniqueConstraint(condition=models.Q(("is_active", True)), fields=("region",), name="uniq_active_points_config_per_region"),
        ),
    ]
