"""
Estate Admin Models Package
"""
from .listing import (
    PropertyType,
    Amenity,
    FieldSpec,
    LISTING_FIELDS,
    COMMON_DETAIL_FIELDS,
    NUMERIC_FIELDS,
    ListingDetails,
    PlotDetails,
    FlatDetails,
    VillaDetails,
    HouseDetails,
    CommercialDetails,
    AgriculturalDetails,
    OtherDetails,
    Listing,
    Translation,
    details_class_for,
    field_specs,
)
from .amenities import AMENITIES_BY_TYPE, amenities_for, predefined_amenity_names
from .content import Blog, HeroContent, FooterContent
from .upload import UploadFile

__all__ = [
    'PropertyType',
    'Amenity',
    'FieldSpec',
    'LISTING_FIELDS',
    'COMMON_DETAIL_FIELDS',
    'NUMERIC_FIELDS',
    'ListingDetails',
    'PlotDetails',
    'FlatDetails',
    'VillaDetails',
    'HouseDetails',
    'CommercialDetails',
    'AgriculturalDetails',
    'OtherDetails',
    'Listing',
    'Translation',
    'details_class_for',
    'field_specs',
    'AMENITIES_BY_TYPE',
    'amenities_for',
    'predefined_amenity_names',
    'Blog',
    'HeroContent',
    'FooterContent',
    'UploadFile',
]
