"""
Admin Forms Package
"""
from .base import FormError, FormValidationError, AmenityConflictError
from .listing_form import ListingForm, CustomDetail, empty_details
from .blog_form import BlogForm
from .content_forms import HeroForm, FooterForm

__all__ = [
    'FormError',
    'FormValidationError',
    'AmenityConflictError',
    'ListingForm',
    'CustomDetail',
    'empty_details',
    'BlogForm',
    'HeroForm',
    'FooterForm',
]
