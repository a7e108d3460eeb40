"""API views for the partner program (v1)."""
import logging

from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.pagination import StandardResultsSetPagination, paginate_list
from api.v1.permissions import IsOwnerOrProgramAdmin, IsProgramAdmin, IsProgramAdminOrReadOnly
from api.v1.serializers import (
    DealCreateSerializer,
    DealSerializer,
    DealUpdateSerializer,
    GrandPrizeCriteriaSerializer,
    GrandPrizeWinnerSerializer,
    MonthlyRegionPrizeSerializer,
    NotificationSerializer,
    PeriodQuerySerializer,
    PointsConfigSerializer,
    PointsConfigWriteSerializer,
    RankingEntrySerializer,
    RegionConfigSerializer,
)
from core.middleware import get_client_ip
from deals.models import Deal
from deals.recalculation import recalculate_all_deal_goals, recalculate_all_deal_points
from deals.services import approve_deal, create_deal, delete_deal, reject_deal, update_deal
from ledger.services import user_available_points, user_earned_points, user_total_points
from notifications.models import Notification
from notifications import services as notification_services
from prizes.models import GrandPrizeCriteria, MonthlyRegionPrize
from prizes.ranking import get_ranking, monthly_goals_ranking, user_ranking_report
from prizes.services import (
    activate_criteria,
    award_grand_prize,
    create_criteria,
    get_active_criteria,
    monthly_goal_progress,
    update_criteria,
)
from regions.models import PointsConfig, RegionConfig
from regions.services import update_points_config

logger = logging.getLogger(__name__)


def _ranking_response(view, request, entries):
    return paginate_list(view, request, entries, lambda entry: RankingEntrySerializer(entry).data)


# ---------------------------------------------------------------------------
# Deals
# ---------------------------------------------------------------------------

class DealViewSet(mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  mixins.DestroyModelMixin,
                  viewsets.GenericViewSet):
    """
    Deals registered by sellers.

    - list / retrieve: sellers see their own deals, admins see all
    - create / partial_update: the seller registers or edits a deal
    - approve / reject / destroy: program admins only
    - recalculate-points / recalculate-goals: re-derive accruals after a rate change
    """

    serializer_class = DealSerializer
    queryset = Deal.objects.select_related('user', 'approved_by', 'region_config')
    filterset_fields = ['status', 'deal_type', 'product_type', 'user']
    ordering_fields = ['created_at', 'close_date', 'deal_value', 'approved_at']
    pagination_class = StandardResultsSetPagination

    ADMIN_ACTIONS = ('approve', 'reject', 'destroy', 'recalculate_points', 'recalculate_goals')

    def get_permissions(self):
        if self.action in self.ADMIN_ACTIONS:
            return [IsProgramAdmin()]
        return [IsAuthenticated(), IsOwnerOrProgramAdmin()]

    def get_queryset(self):
        qs = super().get_queryset()
        if not self.request.user.is_program_admin:
            qs = qs.filter(user=self.request.user)
        return qs

    def create(self, request, *args, **kwargs):
        serializer = DealCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            deal = create_deal(request.user, **serializer.validated_data)
        except ValueError as exc:
            return Response({'detail': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(DealSerializer(deal).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        deal = self.get_object()
        serializer = DealUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            deal = update_deal(deal.pk, **serializer.validated_data)
        except ValueError as exc:
            return Response({'detail': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(DealSerializer(deal).data)

    def destroy(self, request, *args, **kwargs):
        deal = self.get_object()
        delete_deal(deal.pk, actor=request.user, ip=get_client_ip(request))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        try:
            deal = approve_deal(pk, request.user)
        except Deal.DoesNotExist:
            raise NotFound('Vente introuvable.')
        return Response(DealSerializer(deal).data)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        try:
            deal = reject_deal(pk)
        except Deal.DoesNotExist:
            raise NotFound('Vente introuvable.')
        return Response(DealSerializer(deal).data)

    @action(detail=False, methods=['post'], url_path='recalculate-points')
    def recalculate_points(self, request):
        result = recalculate_all_deal_points()
        return Response(result.as_dict())

    @action(detail=False, methods=['post'], url_path='recalculate-goals')
    def recalculate_goals(self, request):
        result = recalculate_all_deal_goals()
        return Response(result.as_dict())


# ---------------------------------------------------------------------------
# Rate configuration
# ---------------------------------------------------------------------------

class RegionConfigViewSet(viewsets.ModelViewSet):
    serializer_class = RegionConfigSerializer
    queryset = RegionConfig.objects.all()
    permission_classes = [IsProgramAdminOrReadOnly]
    filterset_fields = ['region', 'category', 'is_active']


class PointsConfigViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    """Point rates per region. ``POST`` upserts the active row of a region."""

    serializer_class = PointsConfigSerializer
    queryset = PointsConfig.objects.filter(is_active=True).select_related('updated_by')
    permission_classes = [IsProgramAdminOrReadOnly]

    def create(self, request, *args, **kwargs):
        serializer = PointsConfigWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        region = data.pop('region')
        try:
            config = update_points_config(region, actor=request.user, ip=get_client_ip(request), **data)
        except ValueError as exc:
            return Response({'detail': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PointsConfigSerializer(config).data, status=status.HTTP_200_OK)


# ---------------------------------------------------------------------------
# Grand prize
# ---------------------------------------------------------------------------

class GrandPrizeCriteriaViewSet(viewsets.ModelViewSet):
    serializer_class = GrandPrizeCriteriaSerializer
    queryset = GrandPrizeCriteria.objects.all()
    permission_classes = [IsProgramAdmin]
    filterset_fields = ['criteria_type', 'region', 'is_active']

    def get_permissions(self):
        if self.action == 'active':
            return [IsAuthenticated()]
        return super().get_permissions()

    def perform_create(self, serializer):
        try:
            serializer.instance = create_criteria(**serializer.validated_data)
        except ValueError as exc:
            raise DRFValidationError({'detail': str(exc)})

    def perform_update(self, serializer):
        try:
            serializer.instance = update_criteria(serializer.instance.pk, **serializer.validated_data)
        except ValueError as exc:
            raise DRFValidationError({'detail': str(exc)})

    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        try:
            criteria = activate_criteria(pk)
        except GrandPrizeCriteria.DoesNotExist:
            raise NotFound('Critere introuvable.')
        return Response(GrandPrizeCriteriaSerializer(criteria).data)

    @action(detail=False, methods=['get'])
    def active(self, request):
        criteria = get_active_criteria()
        if criteria is None:
            raise NotFound('Aucun critere actif.')
        return Response(GrandPrizeCriteriaSerializer(criteria).data)

    @action(detail=True, methods=['get'])
    def ranking(self, request, pk=None):
        try:
            entries = get_ranking(pk)
        except GrandPrizeCriteria.DoesNotExist:
            raise NotFound('Critere introuvable.')
        return _ranking_response(self, request, entries)

    @action(detail=True, methods=['post'])
    def award(self, request, pk=None):
        try:
            winners = award_grand_prize(pk, notes=request.data.get('notes', ''))
        except GrandPrizeCriteria.DoesNotExist:
            raise NotFound('Critere introuvable.')
        return Response(GrandPrizeWinnerSerializer(winners, many=True).data)


# ---------------------------------------------------------------------------
# Monthly prizes
# ---------------------------------------------------------------------------

class MonthlyRegionPrizeViewSet(viewsets.ModelViewSet):
    serializer_class = MonthlyRegionPrizeSerializer
    queryset = MonthlyRegionPrize.objects.select_related('region_config')
    permission_classes = [IsProgramAdminOrReadOnly]
    filterset_fields = ['region_config', 'month', 'year', 'is_active']

    @action(detail=True, methods=['get'])
    def ranking(self, request, pk=None):
        prize = self.get_object()
        entries = monthly_goals_ranking(prize.region_config, prize.month, prize.year)
        return _ranking_response(self, request, entries)


# ---------------------------------------------------------------------------
# Seller dashboards
# ---------------------------------------------------------------------------

class GoalProgressView(APIView):
    """Goals of the current user for a month against their monthly target."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        today = timezone.localdate()
        query = PeriodQuerySerializer(data={
            'month': request.query_params.get('month', today.month),
            'year': request.query_params.get('year', today.year),
        })
        query.is_valid(raise_exception=True)
        progress = monthly_goal_progress(request.user, **query.validated_data)
        config = progress.pop('region_config')
        progress['region_config'] = config.pk if config else None
        progress['goals'] = str(progress['goals'])
        if progress['percent'] is not None:
            progress['percent'] = str(progress['percent'])
        return Response(progress)


class PointsBalanceView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({
            'total': user_total_points(request.user),
            'available': user_available_points(request.user),
            'earned': user_earned_points(request.user),
        })


class PointsLeaderboardView(APIView):
    """Earned-points leaderboard, optionally restricted to a region."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        entries = user_ranking_report(region=request.query_params.get('region'))
        return _ranking_response(self, request, entries)


class NotificationViewSet(mixins.ListModelMixin,
                          mixins.UpdateModelMixin,
                          viewsets.GenericViewSet):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ['is_read', 'kind']
    http_method_names = ['get', 'patch', 'post', 'head', 'options']

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user)

    @action(detail=False, methods=['post'], url_path='mark-all-read')
    def mark_all_read(self, request):
        updated = notification_services.mark_all_read(request.user)
        return Response({'updated': updated})
