"""Location autocomplete over common US cities and states."""

from typing import Optional

from marketplace.utils.config import MarketplaceConfig


US_CITIES = [
    'New York', 'Los Angeles', 'Chicago', 'Houston', 'Phoenix', 'Philadelphia',
    'San Antonio', 'San Diego', 'Dallas', 'San Jose', 'Austin', 'Jacksonville',
    'Fort Worth', 'Columbus', 'Charlotte', 'San Francisco', 'Indianapolis',
    'Seattle', 'Denver', 'Washington', 'Boston', 'El Paso', 'Nashville',
    'Detroit', 'Oklahoma City', 'Portland', 'Las Vegas', 'Memphis', 'Louisville',
    'Baltimore', 'Milwaukee', 'Albuquerque', 'Tucson', 'Fresno', 'Sacramento',
    'Kansas City', 'Mesa', 'Atlanta', 'Omaha', 'Colorado Springs', 'Raleigh',
    'Miami', 'Long Beach', 'Virginia Beach', 'Oakland', 'Minneapolis', 'Tulsa',
    'Cleveland', 'Wichita', 'Arlington', 'Tampa', 'New Orleans', 'Honolulu',
]

US_STATES = [
    'Alabama', 'Alaska', 'Arizona', 'Arkansas', 'California', 'Colorado',
    'Connecticut', 'Delaware', 'Florida', 'Georgia', 'Hawaii', 'Idaho',
    'Illinois', 'Indiana', 'Iowa', 'Kansas', 'Kentucky', 'Louisiana',
    'Maine', 'Maryland', 'Massachusetts', 'Michigan', 'Minnesota', 'Mississippi',
    'Missouri', 'Montana', 'Nebraska', 'Nevada', 'New Hampshire', 'New Jersey',
    'New Mexico', 'New York', 'North Carolina', 'North Dakota', 'Ohio', 'Oklahoma',
    'Oregon', 'Pennsylvania', 'Rhode Island', 'South Carolina', 'South Dakota',
    'Tennessee', 'Texas', 'Utah', 'Vermont', 'Virginia', 'Washington',
    'West Virginia', 'Wisconsin', 'Wyoming',
]


def get_suggestions(query: Optional[str], limit: Optional[int] = None) -> list[str]:
    """
    Autocomplete candidates for a location query.

    Case-insensitive prefix match: matching cities first, then matching
    states, each in reference-list order, truncated to ``limit`` (8 by
    default). A name present in both lists can appear twice.
    """
    if limit is None:
        limit = MarketplaceConfig.SUGGESTION_LIMIT

    prefix = (query or "").strip().lower()
    if not prefix:
        return []

    suggestions = [city for city in US_CITIES if city.lower().startswith(prefix)]
    suggestions.extend(state for state in US_STATES if state.lower().startswith(prefix))

    return suggestions[:limit]
