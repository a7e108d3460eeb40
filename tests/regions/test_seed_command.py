import pytest
from django.core.management import call_command

from regions.models import PointsConfig, RegionConfig


@pytest.mark.django_db
class TestSeedRegionConfigs:
    def test_seeds_once(self):
        call_command("seed_region_configs")
        call_command("seed_region_configs")

        assert RegionConfig.objects.count() == 14
        assert PointsConfig.objects.count() == 4
        assert RegionConfig.objects.get(region="NOLA", category="MSSP").subcategory == ""

    def test_flush_recreates(self):
        RegionConfig.objects.create(name="Ancien", region="SOLA", category="MSSP")
        call_command("seed_region_configs", flush=True)
        assert not RegionConfig.objects.filter(name="Ancien").exists()
        assert RegionConfig.objects.count() == 14
