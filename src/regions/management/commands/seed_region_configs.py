"""Seed the default region configurations and point rates."""
from django.core.management.base import BaseCommand
from django.db import transaction


class Command(BaseCommand):
    help = "Seed region configs (region/category/subcategory) and per-region point rates"

    REGION_CONFIGS = [
        ("NOLA", "ENTERPRISE", "COLOMBIA"),
        ("NOLA", "ENTERPRISE", "CENTRO AMERICA"),
        ("NOLA", "SMB", "COLOMBIA"),
        ("NOLA", "SMB", "CENTRO AMERICA"),
        ("NOLA", "MSSP", ""),
        ("SOLA", "ENTERPRISE", ""),
        ("SOLA", "SMB", ""),
        ("BRASIL", "ENTERPRISE", ""),
        ("BRASIL", "SMB", ""),
        ("MEXICO", "ENTERPRISE", "PLATINUM"),
        ("MEXICO", "ENTERPRISE", "GOLD"),
        ("MEXICO", "SMB", "PLATINUM"),
        ("MEXICO", "SMB", "GOLD"),
        ("MEXICO", "SMB", "SILVER & REGISTERED"),
    ]

    def add_arguments(self, parser):
        parser.add_argument("--flush", action="store_true", help="Delete existing configs first")

    @transaction.atomic
    def handle(self, *args, **options):
        from regions.models import PointsConfig, RegionConfig

        if options["flush"]:
            self.stdout.write("Flushing existing region configs...")
            RegionConfig.objects.all().delete()
            PointsConfig.objects.all().delete()

        created = 0
        for region, category, subcategory in self.REGION_CONFIGS:
            name = " ".join(part for part in (region, category, subcategory) if part)
            _, was_created = RegionConfig.objects.get_or_create(
                region=region,
                category=category,
                subcategory=subcategory,
                defaults={"name": name},
            )
            if was_created:
                created += 1
            else:
                self.stdout.write(f"  {name} existe deja")

        regions = sorted({region for region, _, _ in self.REGION_CONFIGS})
        for region in regions:
            PointsConfig.objects.get_or_create(region=region, is_active=True)

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: {created} region configs, {len(regions)} point rate tables"
        ))
