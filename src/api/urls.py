"""Main API URL router for /api/v1/."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from api.v1 import views as v1_views

router = DefaultRouter()
router.register(r'deals', v1_views.DealViewSet)
router.register(r'region-configs', v1_views.RegionConfigViewSet)
router.register(r'points-configs', v1_views.PointsConfigViewSet)
router.register(r'grand-prize-criteria', v1_views.GrandPrizeCriteriaViewSet)
router.register(r'monthly-prizes', v1_views.MonthlyRegionPrizeViewSet)
router.register(r'notifications', v1_views.NotificationViewSet, basename='notification')

urlpatterns = [
    path('goals/progress/', v1_views.GoalProgressView.as_view(), name='goal-progress'),
    path('points/balance/', v1_views.PointsBalanceView.as_view(), name='points-balance'),
    path('points/leaderboard/', v1_views.PointsLeaderboardView.as_view(), name='points-leaderboard'),
    path('', include(router.urls)),
]
