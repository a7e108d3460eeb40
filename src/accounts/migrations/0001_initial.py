import uuid

import django.utils.timezone
from django.db import migrations, models

import accounts.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email", models.EmailField(error_messages={"unique": "Un utilisateur avec cette adresse e-mail existe deja."}, max_length=254, unique=True, verbose_name="adresse e-mail")),
                ("first_name", models.CharField(max_length=150, verbose_name="prenom")),
                ("last_name", models.CharField(max_length=150, verbose_name="nom")),
                ("company_name", models.CharField(blank=True, default="", max_length=200, verbose_name="societe")),
                ("country", models.CharField(blank=True, default="", max_length=100, verbose_name="pays")),
                ("role", models.CharField(choices=[("USER", "Vendeur partenaire"), ("ADMIN", "Administrateur"), ("REGIONAL_ADMIN", "Administrateur regional"), ("SUPER_ADMIN", "Super administrateur")], db_index=True, default="USER", max_length=20, verbose_name="role")),
                ("region", models.CharField(blank=True, choices=[("NOLA", "NOLA"), ("SOLA", "SOLA"), ("BRASIL", "Brasil"), ("MEXICO", "Mexico")], db_index=True, default="", max_length=20, verbose_name="region")),
                ("region_category", models.CharField(blank=True, choices=[("ENTERPRISE", "Enterprise"), ("SMB", "SMB"), ("MSSP", "MSSP")], default="", max_length=20, verbose_name="segment de marche")),
                ("region_subcategory", models.CharField(blank=True, default="", max_length=100, verbose_name="sous-region")),
                ("partner_category", models.CharField(blank=True, default="", max_length=50, verbose_name="categorie partenaire")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="actif")),
                ("is_approved", models.BooleanField(default=False, verbose_name="approuve")),
                ("is_staff", models.BooleanField(default=False, verbose_name="membre du personnel")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date d'inscription")),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "verbose_name": "utilisateur",
                "verbose_name_plural": "utilisateurs",
                "ordering": ["last_name", "first_name"],
            },
            managers=[
                ("objects", accounts.models.UserManager()),
            ],
        ),
    ]
