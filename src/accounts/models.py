import uuid

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("L'adresse e-mail est obligatoire.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.SUPER_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_approved", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Le superutilisateur doit avoir is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Le superutilisateur doit avoir is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class Region(models.TextChoices):
    NOLA = "NOLA", "NOLA"
    SOLA = "SOLA", "SOLA"
    BRASIL = "BRASIL", "Brasil"
    MEXICO = "MEXICO", "Mexico"


class RegionCategory(models.TextChoices):
    ENTERPRISE = "ENTERPRISE", "Enterprise"
    SMB = "SMB", "SMB"
    MSSP = "MSSP", "MSSP"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Seller or administrator of the partner program.

    A seller's (region, region_category, region_subcategory) triple selects
    the goal rates applied to their deals; the region alone selects the
    point rates. An empty ``region_subcategory`` means "no subcategory".
    """

    class Role(models.TextChoices):
        USER = "USER", "Vendeur partenaire"
        ADMIN = "ADMIN", "Administrateur"
        REGIONAL_ADMIN = "REGIONAL_ADMIN", "Administrateur regional"
        SUPER_ADMIN = "SUPER_ADMIN", "Super administrateur"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "adresse e-mail",
        unique=True,
        error_messages={
            "unique": "Un utilisateur avec cette adresse e-mail existe deja.",
        },
    )
    first_name = models.CharField("prenom", max_length=150)
    last_name = models.CharField("nom", max_length=150)
    company_name = models.CharField("societe", max_length=200, blank=True, default="")
    country = models.CharField("pays", max_length=100, blank=True, default="")
    role = models.CharField(
        "role",
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
    )
    region = models.CharField(
        "region",
        max_length=20,
        choices=Region.choices,
        blank=True,
        default="",
        db_index=True,
    )
    region_category = models.CharField(
        "segment de marche",
        max_length=20,
        choices=RegionCategory.choices,
        blank=True,
        default="",
    )
    region_subcategory = models.CharField("sous-region", max_length=100, blank=True, default="")
    partner_category = models.CharField("categorie partenaire", max_length=50, blank=True, default="")
    is_active = models.BooleanField("actif", default=True, db_index=True)
    is_approved = models.BooleanField("approuve", default=False)
    is_staff = models.BooleanField("membre du personnel", default=False)
    date_joined = models.DateTimeField("date d'inscription", default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    class Meta:
        verbose_name = "utilisateur"
        verbose_name_plural = "utilisateurs"
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return self.get_full_name() or self.email

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name

    def get_short_name(self):
        return self.first_name

    # ------------------------------------------------------------------
    # Role helper properties
    # ------------------------------------------------------------------

    @property
    def is_program_admin(self):
        return self.is_superuser or self.role in (
            self.Role.ADMIN,
            self.Role.REGIONAL_ADMIN,
            self.Role.SUPER_ADMIN,
        )

    @property
    def is_super_admin(self):
        return self.is_superuser or self.role == self.Role.SUPER_ADMIN

    @property
    def has_rate_key(self):
        """True when region and category are both set, so goal rates can resolve."""
        return bool(self.region and self.region_category)
