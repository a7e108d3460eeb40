"""Rate resolution for accruals.

Goal rates are looked up by exact (region, category, subcategory) match
against active :class:`~regions.models.RegionConfig` rows. There is no
fallback across subcategories: a seller in ``NOLA/SMB/COLOMBIA`` never picks
up the ``NOLA/SMB`` row, and a mismatch is simply unresolved (``None``).

Point rates are per region and come from the active
:class:`~regions.models.PointsConfig`, or the settings defaults when a region
has none.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from django.conf import settings

if TYPE_CHECKING:
    from accounts.models import User
    from regions.models import RegionConfig

RateKey = tuple[str, str, str]


def normalize_key(region, category, subcategory=None) -> RateKey:
    """Build a lookup key; ``None`` and blank subcategories collapse to ``""``."""
    return (
        (region or "").strip(),
        (category or "").strip(),
        (subcategory or "").strip(),
    )


class RateTable:
    """In-memory, flat lookup of active region configs keyed by rate key."""

    def __init__(self, configs: Iterable["RegionConfig"] = ()) -> None:
        self._by_key: dict[RateKey, "RegionConfig"] = {}
        for config in configs:
            self.add(config)

    @classmethod
    def load(cls) -> "RateTable":
        """Snapshot every active config from the database."""
        from regions.models import RegionConfig

        return cls(RegionConfig.objects.filter(is_active=True))

    def add(self, config: "RegionConfig") -> None:
        if not config.is_active:
            return
        key = normalize_key(config.region, config.category, config.subcategory)
        if key in self._by_key:
            raise ValueError(f"Configuration de region en double pour la cle {key}.")
        self._by_key[key] = config

    def resolve(self, region, category, subcategory=None) -> "RegionConfig | None":
        if not region or not category:
            return None
        return self._by_key.get(normalize_key(region, category, subcategory))

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key) -> bool:
        return normalize_key(*key) in self._by_key


def resolve_rate_config(region, category, subcategory=None, table: RateTable | None = None):
    """Return the single active config matching the key exactly, or ``None``.

    With a ``table`` the lookup is pure; without one it is a single indexed
    query against the unique (region, category, subcategory) constraint.
    """
    if table is not None:
        return table.resolve(region, category, subcategory)
    if not region or not category:
        return None

    from regions.models import RegionConfig

    region, category, subcategory = normalize_key(region, category, subcategory)
    return RegionConfig.objects.filter(
        is_active=True,
        region=region,
        category=category,
        subcategory=subcategory,
    ).first()


def resolve_for_user(user: "User", table: RateTable | None = None):
    """Resolve the goal-rate config for a seller, ``None`` when unresolved."""
    if not user.region or not user.region_category:
        return None
    return resolve_rate_config(
        user.region,
        user.region_category,
        user.region_subcategory,
        table=table,
    )


@dataclass(frozen=True)
class PointRates:
    new_customer_rate: int
    renewal_rate: int

    @classmethod
    def defaults(cls) -> "PointRates":
        return cls(
            new_customer_rate=settings.DEFAULT_NEW_CUSTOMER_RATE,
            renewal_rate=settings.DEFAULT_RENEWAL_RATE,
        )


def points_rates_for_region(region) -> PointRates:
    """Active point rates for ``region``, falling back to the configured defaults."""
    from regions.models import PointsConfig

    config = None
    if region:
        config = PointsConfig.objects.filter(region=region, is_active=True).first()
    if config is None:
        return PointRates.defaults()
    return PointRates(
        new_customer_rate=config.new_customer_rate,
        renewal_rate=config.renewal_rate,
    )


def load_points_rates() -> dict[str, PointRates]:
    """Snapshot of active point rates for every configured region."""
    from regions.models import PointsConfig

    return {
        config.region: PointRates(config.new_customer_rate, config.renewal_rate)
        for config in PointsConfig.objects.filter(is_active=True)
    }
