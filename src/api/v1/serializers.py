"""Serializers for the partner program API v1."""
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.models import Region
from deals.models import Deal
from notifications.models import Notification
from prizes.models import GrandPrizeCriteria, GrandPrizeWinner, MonthlyRegionPrize
from prizes.services import validate_weights
from regions.models import PointsConfig, RegionConfig

User = get_user_model()


# ---------------------------------------------------------------------------
# Deals
# ---------------------------------------------------------------------------

class DealSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = Deal
        fields = [
            'id', 'user', 'user_name', 'product_type', 'product_name', 'deal_type',
            'deal_value', 'quantity', 'close_date', 'client_info',
            'license_agreement_number', 'status', 'points_earned', 'goals_earned',
            'region_config', 'approved_by', 'approved_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_user_name(self, obj) -> str:
        return obj.user.get_full_name() or obj.user.email


class DealCreateSerializer(serializers.Serializer):
    product_type = serializers.ChoiceField(choices=Deal.ProductType.choices, default=Deal.ProductType.SOFTWARE)
    product_name = serializers.CharField(max_length=200)
    deal_type = serializers.ChoiceField(choices=Deal.DealType.choices, default=Deal.DealType.NEW_CUSTOMER)
    deal_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField(min_value=1, default=1)
    close_date = serializers.DateField()
    client_info = serializers.CharField(required=False, allow_blank=True, default='')
    license_agreement_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')

    def validate_deal_value(self, value):
        if value <= Decimal('0'):
            raise serializers.ValidationError('Le montant de la vente doit etre strictement positif.')
        return value


class DealUpdateSerializer(DealCreateSerializer):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault('partial', True)
        super().__init__(*args, **kwargs)


# ---------------------------------------------------------------------------
# Rate configuration
# ---------------------------------------------------------------------------

class RegionConfigSerializer(serializers.ModelSerializer):
    class Meta:
        model = RegionConfig
        fields = [
            'id', 'name', 'region', 'category', 'subcategory',
            'new_customer_goal_rate', 'renewal_goal_rate', 'monthly_goal_target',
            'is_active', 'expiration_date', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_subcategory(self, value):
        return (value or '').strip()

    def validate(self, attrs):
        region = attrs.get('region', getattr(self.instance, 'region', None))
        category = attrs.get('category', getattr(self.instance, 'category', None))
        subcategory = attrs.get('subcategory', getattr(self.instance, 'subcategory', ''))
        duplicates = RegionConfig.objects.filter(region=region, category=category, subcategory=subcategory)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError(
                'Une configuration existe deja pour cette region, categorie et sous-categorie.'
            )
        return attrs


class PointsConfigSerializer(serializers.ModelSerializer):
    class Meta:
        model = PointsConfig
        fields = [
            'id', 'region', 'new_customer_rate', 'renewal_rate',
            'grand_prize_threshold', 'is_active', 'updated_by', 'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'updated_by', 'updated_at']


class PointsConfigWriteSerializer(serializers.Serializer):
    region = serializers.ChoiceField(choices=Region.choices)
    new_customer_rate = serializers.IntegerField(min_value=1, required=False)
    renewal_rate = serializers.IntegerField(min_value=1, required=False)
    grand_prize_threshold = serializers.IntegerField(min_value=0, required=False)


# ---------------------------------------------------------------------------
# Prizes
# ---------------------------------------------------------------------------

class GrandPrizeCriteriaSerializer(serializers.ModelSerializer):
    class Meta:
        model = GrandPrizeCriteria
        fields = [
            'id', 'name', 'criteria_type', 'region', 'market_segment', 'partner_category',
            'region_subcategory', 'min_points', 'min_deals', 'points_weight', 'deals_weight',
            'start_date', 'end_date', 'redemption_start_date', 'redemption_end_date',
            'ranking_position', 'prize_description', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # create_criteria activates new rows by default and deactivates the current one;
        # an update only activates when is_active is sent explicitly.
        extra_kwargs = {'is_active': {'required': False, 'validators': []}}

    def validate(self, attrs):
        def current(name, default=None):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, default)

        try:
            validate_weights(
                current('criteria_type', GrandPrizeCriteria.CriteriaType.COMBINED),
                current('points_weight'),
                current('deals_weight'),
            )
        except ValueError as exc:
            raise serializers.ValidationError({'deals_weight': str(exc)})

        start, end = current('start_date'), current('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'La fin de la periode doit suivre son debut.'})
        return attrs


class GrandPrizeWinnerSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = GrandPrizeWinner
        fields = ['id', 'criteria', 'user', 'user_name', 'points', 'deals', 'goals', 'score', 'rank', 'notes', 'created_at']
        read_only_fields = fields

    def get_user_name(self, obj) -> str:
        return obj.user.get_full_name() or obj.user.email


class MonthlyRegionPrizeSerializer(serializers.ModelSerializer):
    class Meta:
        model = MonthlyRegionPrize
        fields = [
            'id', 'region_config', 'month', 'year', 'rank', 'prize_name', 'prize_description',
            'prize_value', 'goal_target', 'redemption_start_date', 'redemption_end_date',
            'is_active', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']


class RankingEntrySerializer(serializers.Serializer):
    rank = serializers.IntegerField()
    user_id = serializers.CharField(source='user.pk')
    user_name = serializers.SerializerMethodField()
    email = serializers.EmailField(source='user.email')
    region = serializers.CharField(source='user.region')
    points = serializers.IntegerField()
    deals = serializers.IntegerField()
    goals = serializers.DecimalField(max_digits=14, decimal_places=2)
    score = serializers.DecimalField(max_digits=16, decimal_places=2)

    def get_user_name(self, obj) -> str:
        return obj.user.get_full_name() or obj.user.email


class PeriodQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'kind', 'level', 'title', 'message', 'payload', 'is_read', 'created_at']
        read_only_fields = ['id', 'kind', 'level', 'title', 'message', 'payload', 'created_at']
