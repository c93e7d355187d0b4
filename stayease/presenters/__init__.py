# stayease/presenters/__init__.py
from .appointment_card import AppointmentCard, present_appointment
from .forms import BookingForm, CreateListingForm, FormError, ListingFilterForm, ReviewForm
from .listing_card import ListingCard, present_listing
from .notifications import badge_text, present_notification, unread_summary
from .review_card import ReviewCard, present_review

__all__ = [
    "AppointmentCard",
    "BookingForm",
    "CreateListingForm",
    "FormError",
    "ListingCard",
    "ListingFilterForm",
    "ReviewCard",
    "ReviewForm",
    "badge_text",
    "present_appointment",
    "present_listing",
    "present_notification",
    "present_review",
    "unread_summary",
]
