from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..schemas import Review

MAX_STARS = 5


def star_row(rating: int) -> str:
    filled = max(0, min(MAX_STARS, int(rating)))
    return "★" * filled + "☆" * (MAX_STARS - filled)


@dataclass(frozen=True)
class ReviewCard:
    review_id: int
    stars: str
    rating: int
    comment: str
    author: str
    created: str
    listing_title: Optional[str]

    def as_dict(self) -> dict:
        return {
            "id": self.review_id,
            "stars": self.stars,
            "comment": self.comment,
            "author": self.author,
            "created": self.created,
            "listing": self.listing_title,
        }


def present_review(review: Review) -> ReviewCard:
    return ReviewCard(
        review_id=review.id,
        stars=star_row(review.rating),
        rating=review.rating,
        comment=review.comment,
        author=review.user_name or "Anonymous",
        created=(review.created_at or "")[:10],
        listing_title=review.listing.title if review.listing else None,
    )
