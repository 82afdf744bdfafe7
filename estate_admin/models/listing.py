"""
Property Listing Data Models
"""
from dataclasses import dataclass, field, fields, asdict
from typing import ClassVar, List, Optional, Dict, Any, Tuple, Type
from enum import Enum


class PropertyType(Enum):
    """Property types a listing can have"""
    PLOT = "plot"
    FLAT = "flat"
    VILLA = "villa"
    HOUSE = "house"
    COMMERCIAL = "commercial"
    AGRICULTURAL = "agricultural"
    OTHERS = "others"

    @property
    def label(self) -> str:
        return PROPERTY_TYPE_LABELS[self]


PROPERTY_TYPE_LABELS = {
    PropertyType.PLOT: 'Plot / Land',
    PropertyType.FLAT: 'Flat',
    PropertyType.VILLA: 'Villa',
    PropertyType.HOUSE: 'House',
    PropertyType.COMMERCIAL: 'Commercial',
    PropertyType.AGRICULTURAL: 'Agricultural Land',
    PropertyType.OTHERS: 'Others',
}


DEFAULT_AMENITY_ICON = 'star'


@dataclass(frozen=True)
class Amenity:
    """An amenity chip: display name + icon identifier"""
    name: str
    icon: str = DEFAULT_AMENITY_ICON

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Amenity':
        return cls(
            name=str(data.get('name', '')),
            icon=data.get('icon') or DEFAULT_AMENITY_ICON,
        )


# ==================== FIELD SCHEMA ====================

@dataclass(frozen=True)
class FieldSpec:
    """One input of the details form"""
    name: str
    label: str
    kind: str = 'text'  # number | text | textarea | bool | choice
    required: bool = False
    choices: Tuple[str, ...] = ()
    default: Any = ''

    @property
    def is_numeric(self) -> bool:
        return self.kind == 'number'

    def empty_value(self) -> Any:
        if self.kind == 'bool':
            return False
        return self.default


FURNISHING_CHOICES = ('None', 'Semi', 'Full')
COMMERCIAL_KIND_CHOICES = ('Office', 'Shop', 'Showroom')
WATER_SOURCE_CHOICES = ('', 'Borewell', 'Canal', 'River')

# Present on every property type
COMMON_DETAIL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec('connectivity', 'Connectivity', 'textarea'),
    FieldSpec('brochure_url', 'Brochure / Document'),
    FieldSpec('youtube_embed_url', 'YouTube Video Embed URL'),
    FieldSpec('note_en', 'Note (English)', 'textarea'),
    FieldSpec('note_te', 'Note (Telugu)', 'textarea'),
)

LISTING_FIELDS: Dict[PropertyType, Tuple[FieldSpec, ...]] = {
    PropertyType.PLOT: (
        FieldSpec('area_sq_yards', 'Area (Sq. Yards)', 'number', required=True),
        FieldSpec('plot_number', 'Plot Number'),
        FieldSpec('road_facing', 'Road Facing (e.g., East)'),
        FieldSpec('survey_no', 'Survey Number'),
        FieldSpec('gated_community', 'Gated Community', 'bool'),
        FieldSpec('investment_features', 'Investment Features', 'textarea'),
    ),
    PropertyType.FLAT: (
        FieldSpec('bhk', 'BHK', 'number', required=True),
        FieldSpec('floor', 'Floor', 'number', required=True),
        FieldSpec('total_floors', 'Total Floors', 'number', required=True),
        FieldSpec('sq_ft', 'Area (Sq. Ft)', 'number', required=True),
        FieldSpec('furnishing', 'Furnishing', 'choice', choices=FURNISHING_CHOICES, default='None'),
        FieldSpec('car_parking', 'Car Parking Available', 'bool'),
    ),
    PropertyType.VILLA: (
        FieldSpec('bhk', 'BHK', 'number', required=True),
        FieldSpec('sq_ft', 'Area (Sq. Ft)', 'number', required=True),
        FieldSpec('furnishing', 'Furnishing', 'choice', choices=FURNISHING_CHOICES, default='None'),
        FieldSpec('private_pool', 'Private Pool', 'bool'),
    ),
    PropertyType.HOUSE: (
        FieldSpec('bhk', 'BHK', 'number', required=True),
        FieldSpec('sq_ft', 'Area (Sq. Ft)', 'number', required=True),
        FieldSpec('total_floors', 'Floors', 'number'),
        FieldSpec('age_years', 'Age (Years)', 'number'),
        FieldSpec('furnishing', 'Furnishing', 'choice', choices=FURNISHING_CHOICES, default='None'),
        FieldSpec('car_parking', 'Car Parking Available', 'bool'),
    ),
    PropertyType.COMMERCIAL: (
        FieldSpec('sq_ft', 'Area (Sq. Ft)', 'number', required=True),
        FieldSpec('property_type', 'Commercial Type', 'choice', choices=COMMERCIAL_KIND_CHOICES, default='Office'),
        FieldSpec('floor', 'Floor', 'number'),
    ),
    PropertyType.AGRICULTURAL: (
        FieldSpec('acres', 'Acres', 'number', required=True),
        FieldSpec('survey_no', 'Survey Number'),
        FieldSpec('water_source', 'Water Source', 'choice', choices=WATER_SOURCE_CHOICES),
        FieldSpec('investment_features', 'Investment Features', 'textarea'),
    ),
    PropertyType.OTHERS: (
        FieldSpec('area', 'Area (e.g., 1200 sq.ft., 2 acres)', required=True),
        FieldSpec('investment_features', 'Investment Features', 'textarea'),
    ),
}

# property type -> detail fields stored as numbers
NUMERIC_FIELDS: Dict[PropertyType, List[str]] = {
    property_type: [spec.name for spec in specs if spec.is_numeric]
    for property_type, specs in LISTING_FIELDS.items()
}


def field_specs(property_type: PropertyType) -> Tuple[FieldSpec, ...]:
    """Type-specific fields followed by the common ones"""
    return LISTING_FIELDS[PropertyType(property_type)] + COMMON_DETAIL_FIELDS


# ==================== DETAILS (tagged by property type) ====================

@dataclass
class ListingDetails:
    """
    Fields shared by every property type.

    Subclasses add the fields of one property type. ``custom`` holds the
    free-form key/value pairs staff add on top of the standard fields.
    """
    listing_type: ClassVar[PropertyType] = None

    amenities: List[Amenity] = field(default_factory=list)
    connectivity: str = ''
    brochure_url: str = ''
    youtube_embed_url: str = ''
    note_en: str = ''
    note_te: str = ''
    custom: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def standard_keys(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != 'custom']

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the JSON object stored in listings.details"""
        data: Dict[str, Any] = {}
        for f in fields(self):
            if f.name in ('amenities', 'custom'):
                continue
            data[f.name] = getattr(self, f.name)
        data['amenities'] = [a.to_dict() for a in self.amenities]

        for key, value in self.custom.items():
            if key in data:
                raise ValueError(f"Custom detail '{key}' clashes with a standard field")
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ListingDetails':
        """Split a stored details object into standard fields and custom pairs"""
        standard = set(cls.standard_keys())
        kwargs: Dict[str, Any] = {}
        custom: Dict[str, str] = {}
        for key, value in (data or {}).items():
            if key == 'amenities':
                kwargs['amenities'] = [
                    Amenity.from_dict(a) if isinstance(a, dict) else a
                    for a in (value or [])
                ]
            elif key in standard:
                kwargs[key] = value
            else:
                custom[key] = '' if value is None else str(value)
        return cls(custom=custom, **kwargs)


@dataclass
class PlotDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.PLOT

    area_sq_yards: Optional[float] = None
    plot_number: str = ''
    road_facing: str = ''
    survey_no: str = ''
    gated_community: bool = False
    investment_features: str = ''


@dataclass
class FlatDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.FLAT

    bhk: Optional[float] = None
    floor: Optional[float] = None
    total_floors: Optional[float] = None
    sq_ft: Optional[float] = None
    furnishing: str = 'None'
    car_parking: bool = False


@dataclass
class VillaDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.VILLA

    bhk: Optional[float] = None
    sq_ft: Optional[float] = None
    furnishing: str = 'None'
    private_pool: bool = False


@dataclass
class HouseDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.HOUSE

    bhk: Optional[float] = None
    sq_ft: Optional[float] = None
    total_floors: Optional[float] = None
    age_years: Optional[float] = None
    furnishing: str = 'None'
    car_parking: bool = False


@dataclass
class CommercialDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.COMMERCIAL

    sq_ft: Optional[float] = None
    # Office / Shop / Showroom
    property_type: str = 'Office'
    floor: Optional[float] = None


@dataclass
class AgriculturalDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.AGRICULTURAL

    acres: Optional[float] = None
    survey_no: str = ''
    water_source: str = ''
    investment_features: str = ''


@dataclass
class OtherDetails(ListingDetails):
    listing_type: ClassVar[PropertyType] = PropertyType.OTHERS

    area: str = ''
    investment_features: str = ''


DETAILS_BY_TYPE: Dict[PropertyType, Type[ListingDetails]] = {
    cls.listing_type: cls
    for cls in (PlotDetails, FlatDetails, VillaDetails, HouseDetails,
                CommercialDetails, AgriculturalDetails, OtherDetails)
}


def details_class_for(property_type: PropertyType) -> Type[ListingDetails]:
    return DETAILS_BY_TYPE[PropertyType(property_type)]


# ==================== LISTING ====================

@dataclass
class Listing:
    """
    A property listing row.

    ``details`` is the variant matching ``type``; ``slug`` and
    ``created_at`` are filled in by the backend.
    """
    type: PropertyType
    location: str
    price: float
    image_urls: List[str] = field(default_factory=list)
    map_embed: str = ''
    details: ListingDetails = None
    id: Optional[int] = None
    slug: Optional[str] = None
    created_at: Optional[str] = None

    def __post_init__(self):
        self.type = PropertyType(self.type)
        if self.details is None:
            self.details = details_class_for(self.type)()
        elif not isinstance(self.details, details_class_for(self.type)):
            raise ValueError(
                f"details of type {type(self.details).__name__} do not match property type '{self.type.value}'"
            )

    def to_record(self) -> Dict[str, Any]:
        """Columns written on insert/update"""
        return {
            'type': self.type.value,
            'location': self.location,
            'price': self.price,
            'image_urls': list(self.image_urls),
            'map_embed': self.map_embed,
            'details': self.details.to_dict(),
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> 'Listing':
        """Create a Listing from a table row"""
        prop_type = PropertyType(data.get('type'))
        return cls(
            type=prop_type,
            location=data.get('location') or '',
            price=data.get('price'),
            image_urls=list(data.get('image_urls') or []),
            map_embed=data.get('map_embed') or '',
            details=details_class_for(prop_type).from_dict(data.get('details')),
            id=data.get('id'),
            slug=data.get('slug'),
            created_at=data.get('created_at'),
        )


@dataclass
class Translation:
    """Language-specific title/description of a listing or blog post"""
    parent_id: Optional[int] = None
    title: str = ''
    description: str = ''
    id: Optional[int] = None

    @property
    def has_title(self) -> bool:
        return bool((self.title or '').strip())
