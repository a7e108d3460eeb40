from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from deals.models import Deal
from regions.models import PointsConfig, RegionConfig


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        first_name="Admin",
        last_name="User",
        role=User.Role.ADMIN,
        is_approved=True,
    )


@pytest.fixture
def seller(db):
    return User.objects.create_user(
        email="seller@test.com",
        password="testpass123",
        first_name="Sofia",
        last_name="Ramirez",
        role=User.Role.USER,
        region="NOLA",
        region_category="ENTERPRISE",
        region_subcategory="COLOMBIA",
        is_approved=True,
    )


@pytest.fixture
def make_seller(db):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        defaults = {
            "email": f"seller{counter['n']}@test.com",
            "password": "testpass123",
            "first_name": f"Seller{counter['n']}",
            "last_name": "Test",
            "role": User.Role.USER,
            "region": "NOLA",
            "region_category": "ENTERPRISE",
            "region_subcategory": "COLOMBIA",
            "is_approved": True,
        }
        defaults.update(fields)
        return User.objects.create_user(**defaults)

    return _make


@pytest.fixture
def nola_points(db):
    return PointsConfig.objects.create(region="NOLA", new_customer_rate=1000, renewal_rate=2000)


@pytest.fixture
def colombia_config(db):
    return RegionConfig.objects.create(
        name="NOLA ENTERPRISE COLOMBIA",
        region="NOLA",
        category="ENTERPRISE",
        subcategory="COLOMBIA",
        new_customer_goal_rate=1000,
        renewal_goal_rate=2000,
        monthly_goal_target=100,
    )


@pytest.fixture
def make_deal(db):
    def _make(user, deal_value="50000", deal_type=Deal.DealType.NEW_CUSTOMER,
              close_date=date(2026, 3, 15), **fields):
        return Deal.objects.create(
            user=user,
            product_name=fields.pop("product_name", "Endpoint Security"),
            deal_type=deal_type,
            deal_value=Decimal(deal_value),
            close_date=close_date,
            **fields,
        )

    return _make


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def seller_client(seller):
    client = APIClient()
    client.force_authenticate(user=seller)
    return client
