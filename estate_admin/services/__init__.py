"""
Admin Services Package
"""
from .base import ServiceError, NotFoundError, SaveError, DeploymentError, SaveResult
from .assets import AssetStore
from .translations import TranslationTable
from .listings import ListingService, ListingSummary
from .blogs import BlogService, BlogSummary
from .content import HeroContentService, FooterContentService
from .deployment import DeploymentService

__all__ = [
    'ServiceError',
    'NotFoundError',
    'SaveError',
    'DeploymentError',
    'SaveResult',
    'AssetStore',
    'TranslationTable',
    'ListingService',
    'ListingSummary',
    'BlogService',
    'BlogSummary',
    'HeroContentService',
    'FooterContentService',
    'DeploymentService',
]
