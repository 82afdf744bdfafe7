"""
Hero and footer content: single rows with a fixed id, written by upsert.
"""
import dataclasses
import logging
from typing import Optional

from .assets import AssetStore
from .base import BaseService, SaveResult
from ..api.client import BackendClient, BackendAPIError
from ..api.config import Config
from ..forms.content_forms import HeroForm, FooterForm
from ..images.processor import ImageProcessor
from ..models.content import HeroContent, FooterContent


LOGGER = logging.getLogger(__name__)

HERO_TABLE = 'hero_content'
FOOTER_TABLE = 'footer_content'
HERO_BUCKET = 'hero-image'


class SingletonContentService(BaseService):
    """Shared load for single-row content tables"""

    TABLE = None

    def _fetch_row(self, fetch_failed_key: str) -> Optional[dict]:
        """The singleton row, None when it has not been created yet"""
        try:
            return self.client.select(self.TABLE, filters={'id': Config.SINGLETON_ID}, single=True)
        except BackendAPIError as e:
            if e.is_not_found:
                LOGGER.info("No %s row yet; starting from an empty form", self.TABLE)
                return None
            raise self._fail(fetch_failed_key, e)


class HeroContentService(SingletonContentService):
    TABLE = HERO_TABLE

    def __init__(self, client: BackendClient, lang: Optional[str] = None,
                 image_processor: ImageProcessor = None):
        super().__init__(client, lang)
        self.images = AssetStore(
            client, HERO_BUCKET, prefix='private', processor=image_processor or ImageProcessor(),
        )

    def load(self) -> HeroForm:
        row = self._fetch_row('hero.fetch_failed')
        return HeroForm(HeroContent.from_record(row), lang=self.lang)

    def save(self, form: HeroForm) -> SaveResult:
        """Replace or clear the background image, then upsert the hero row"""
        LOGGER.info("Saving hero content")
        background_url = self._run_step(
            'background_image',
            lambda: self.images.replace_primary(
                form.original_background_image_url,
                form.content.background_image_url,
                form.new_background_image,
            ),
            'hero.upload_failed',
        )

        content = dataclasses.replace(form.content, background_image_url=background_url)
        self._run_step(
            'hero_content',
            lambda: self.client.upsert(HERO_TABLE, content.to_record(Config.SINGLETON_ID)),
            'hero.save_failed',
        )
        form.mark_saved(background_url)
        return SaveResult(record=content, message=self._t('hero.saved'))


class FooterContentService(SingletonContentService):
    TABLE = FOOTER_TABLE

    def load(self) -> FooterForm:
        row = self._fetch_row('footer.fetch_failed')
        return FooterForm(FooterContent.from_record(row), lang=self.lang)

    def save(self, form: FooterForm) -> SaveResult:
        LOGGER.info("Saving footer content")
        self._run_step(
            'footer_content',
            lambda: self.client.upsert(FOOTER_TABLE, form.content.to_record(Config.SINGLETON_ID)),
            'footer.save_failed',
        )
        return SaveResult(record=form.content, message=self._t('footer.saved'))
