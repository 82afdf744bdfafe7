"""
Estate Admin - content management for a bilingual real-estate website
"""
from .api import BackendClient, BackendAPIError, Config
from .models import (
    PropertyType, Amenity, Listing, Translation, Blog, HeroContent, FooterContent, UploadFile
)
from .forms import ListingForm, BlogForm, HeroForm, FooterForm, FormError, FormValidationError
from .services import (
    ListingService, BlogService, HeroContentService, FooterContentService, DeploymentService,
    ServiceError, NotFoundError, SaveError, DeploymentError
)

__version__ = '1.0.0'
__all__ = [
    # API
    'BackendClient',
    'BackendAPIError',
    'Config',
    # Models
    'PropertyType',
    'Amenity',
    'Listing',
    'Translation',
    'Blog',
    'HeroContent',
    'FooterContent',
    'UploadFile',
    # Forms
    'ListingForm',
    'BlogForm',
    'HeroForm',
    'FooterForm',
    'FormError',
    'FormValidationError',
    # Services
    'ListingService',
    'BlogService',
    'HeroContentService',
    'FooterContentService',
    'DeploymentService',
    'ServiceError',
    'NotFoundError',
    'SaveError',
    'DeploymentError',
]
