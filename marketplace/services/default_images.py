"""Fallback images for listings without an uploaded photo."""

from marketplace.models.listing import Listing


DEFAULT_IMAGES = {
    'garage': 'https://images.unsplash.com/photo-1580587771525-78b9dba3b914?w=800&h=600&fit=crop',
    'warehouse': 'https://images.unsplash.com/photo-1586528116311-ad8dd3c8310d?w=800&h=600&fit=crop',
    'boat storage': 'https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800&h=600&fit=crop',
    'rv storage': 'https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800&h=600&fit=crop',
    'driveway': 'https://images.unsplash.com/photo-1549317661-bd32c8ce0db2?w=800&h=600&fit=crop',
    'other': 'https://images.unsplash.com/photo-1586528116311-ad8dd3c8310d?w=800&h=600&fit=crop',
}

# Checked in order, first hit wins
_KEYWORD_CATEGORIES = [
    (("boat", "marine"), 'boat storage'),
    (("rv", "recreational"), 'rv storage'),
    (("warehouse", "storage"), 'warehouse'),
    (("garage",), 'garage'),
    (("driveway", "parking"), 'driveway'),
]


def get_default_image(unit_type: str) -> str:
    """Map a unit type label to its category placeholder image URL."""
    label = (unit_type or "").lower()

    for keywords, category in _KEYWORD_CATEGORIES:
        if any(keyword in label for keyword in keywords):
            return DEFAULT_IMAGES[category]

    return DEFAULT_IMAGES.get(label, DEFAULT_IMAGES['other'])


def resolve_display_image(listing: Listing) -> str:
    """The listing's own image, or its category default."""
    return listing.image_url or get_default_image(listing.unit_type)
