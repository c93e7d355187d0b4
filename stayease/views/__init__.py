# stayease/views/__init__.py
from .base import GuardedView, ViewState, SIGN_IN_ROUTE
from .header import HeaderView
from .owner import OwnerDashboardView, OwnerListingsView, OwnerNotificationsView
from .public import ListingDetailView
from .tenant import (
    BookAppointmentView,
    TenantAppointmentsView,
    TenantDashboardView,
    TenantListingsView,
    TenantReviewsView,
    Toast,
)

__all__ = [
    "SIGN_IN_ROUTE",
    "BookAppointmentView",
    "GuardedView",
    "HeaderView",
    "ListingDetailView",
    "OwnerDashboardView",
    "OwnerListingsView",
    "OwnerNotificationsView",
    "TenantAppointmentsView",
    "TenantDashboardView",
    "TenantListingsView",
    "TenantReviewsView",
    "Toast",
    "ViewState",
]
