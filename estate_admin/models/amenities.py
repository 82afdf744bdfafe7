"""
Predefined amenity catalog, keyed by property type and category.
"""
from typing import Dict, List, Optional

from .listing import PropertyType, Amenity


AMENITY_CATEGORIES = ('facilities', 'recreation', 'safety')


# Facilities
CLUBHOUSE = Amenity('Modern Clubhouse', 'apartment')
POOL = Amenity('Swimming Pool', 'pool')
GYM = Amenity('Gymnasium', 'fitness_center')
POWER_BACKUP = Amenity('Power Backup', 'power')
CAR_PARKING = Amenity('Car Parking', 'local_parking')
LIFT = Amenity('Lift', 'elevator')
WATER_SUPPLY = Amenity('Water Supply', 'water_drop')

# Recreation
PLAYING_GROUND = Amenity('Playing Ground', 'sports_soccer')
ROOFTOP_GARDEN = Amenity('Rooftop Garden', 'grass')
KIDS_PLAY_AREA = Amenity('Kids Play Area', 'child_friendly')
JOGGING_TRACK = Amenity('Jogging Track', 'directions_run')
AMPHITHEATRE = Amenity('Amphitheatre', 'theaters')

# Safety
SECURITY = Amenity('24/7 Security', 'shield')
CCTV = Amenity('CCTV Surveillance', 'videocam')
GATED_COMMUNITY = Amenity('Gated Community', 'gite')
FIRE_SAFETY = Amenity('Fire Safety', 'fire_extinguisher')


_RESIDENTIAL = {
    'facilities': [CLUBHOUSE, POOL, GYM, POWER_BACKUP, CAR_PARKING, LIFT, WATER_SUPPLY],
    'recreation': [PLAYING_GROUND, ROOFTOP_GARDEN, KIDS_PLAY_AREA, JOGGING_TRACK],
    'safety': [SECURITY, CCTV, GATED_COMMUNITY, FIRE_SAFETY],
}

AMENITIES_BY_TYPE: Dict[PropertyType, Dict[str, List[Amenity]]] = {
    PropertyType.PLOT: {
        'facilities': [WATER_SUPPLY],
        'recreation': [PLAYING_GROUND, JOGGING_TRACK],
        'safety': [GATED_COMMUNITY, SECURITY],
    },
    PropertyType.FLAT: _RESIDENTIAL,
    PropertyType.VILLA: _RESIDENTIAL,
    PropertyType.HOUSE: _RESIDENTIAL,
    PropertyType.COMMERCIAL: {
        'facilities': [POWER_BACKUP, CAR_PARKING, LIFT, WATER_SUPPLY],
        'safety': [SECURITY, CCTV, FIRE_SAFETY],
    },
}


def _combine(category: str) -> List[Amenity]:
    # first occurrence wins, keyed by name
    combined: Dict[str, Amenity] = {}
    for catalog in list(AMENITIES_BY_TYPE.values()):
        for amenity in catalog.get(category, []):
            combined.setdefault(amenity.name, amenity)
    return list(combined.values())


AMENITIES_BY_TYPE[PropertyType.OTHERS] = {category: _combine(category) for category in AMENITY_CATEGORIES}


def amenities_for(property_type: PropertyType) -> Dict[str, List[Amenity]]:
    """Catalog for a property type by category (empty when the type has none)"""
    return AMENITIES_BY_TYPE.get(PropertyType(property_type), {})


def predefined_amenity_names(property_type: PropertyType) -> List[str]:
    return [a.name for amenities in amenities_for(property_type).values() for a in amenities]


def find_predefined(property_type: PropertyType, name: str) -> Optional[Amenity]:
    """Case-insensitive catalog lookup"""
    wanted = (name or '').strip().lower()
    for amenities in amenities_for(property_type).values():
        for amenity in amenities:
            if amenity.name.lower() == wanted:
                return amenity
    return None
