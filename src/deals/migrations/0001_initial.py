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
            name="Deal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="cree le")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="modifie le")),
                ("product_type", models.CharField(choices=[("software", "Logiciel"), ("hardware", "Materiel"), ("equipment", "Equipement")], default="software", max_length=20, verbose_name="type de produit")),
                ("product_name", models.CharField(max_length=200, verbose_name="produit")),
                ("deal_type", models.CharField(choices=[("new_customer", "Nouveau client"), ("renewal", "Renouvellement")], default="new_customer", max_length=20, verbose_name="type de vente")),
                ("deal_value", models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))], verbose_name="montant (USD)")),
                ("quantity", models.PositiveIntegerField(default=1, verbose_name="quantite")),
                ("close_date", models.DateField(verbose_name="date de cloture")),
                ("client_info", models.TextField(blank=True, default="", verbose_name="client")),
                ("license_agreement_number", models.CharField(blank=True, default="", max_length=100, verbose_name="numero de licence")),
                ("status", models.CharField(choices=[("pending", "En attente"), ("approved", "Approuvee"), ("rejected", "Rejetee")], db_index=True, default="pending", max_length=20, verbose_name="statut")),
                ("points_earned", models.IntegerField(default=0, verbose_name="points gagnes")),
                ("goals_earned", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="buts gagnes")),
                ("approved_at", models.DateTimeField(blank=True, null=True, verbose_name="approuve le")),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approved_deals", to=settings.AUTH_USER_MODEL, verbose_name="approuve par")),
                ("region_config", models.ForeignKey(blank=True, help_text="Configuration resolue lors de la derniere approbation.", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="deals", to="regions.regionconfig", verbose_name="configuration de region")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="deals", to=settings.AUTH_USER_MODEL, verbose_name="vendeur")),
            ],
            options={
                "verbose_name": "vente",
                "verbose_name_plural": "ventes",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "approved_at"], name="deal_status_approved_idx"),
                    models.Index(fields=["user", "status"], name="deal_user_status_idx"),
                ],
            },
        ),
    ]
