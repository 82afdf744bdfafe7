"""
Listing Service

Loads listings into edit forms and saves forms back through the
five-step pipeline:

1. (edit only) delete stored images the user removed
2. upload newly attached images
3. replace or clear the brochure
4. insert or update the listing row
5. upsert the English translation; upsert or delete the Telugu one

A failing step aborts the save with SaveError. Earlier steps are not
rolled back.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .assets import AssetStore
from .base import BaseService, NotFoundError, SaveResult
from .translations import TranslationTable
from ..api.client import BackendClient, BackendAPIError
from ..forms.listing_form import ListingForm
from ..i18n import language_name
from ..images.processor import ImageProcessor
from ..models.listing import Listing, PropertyType
from ..utils.formatters import format_price_in_lakhs_crores
from ..utils.parallel import fan_out


LOGGER = logging.getLogger(__name__)

LISTINGS_TABLE = 'listings'
EN_TRANSLATIONS_TABLE = 'listing_translations'
TE_TRANSLATIONS_TABLE = 'listing_translations_telugu'
IMAGES_BUCKET = 'listing-images'
DOCUMENTS_BUCKET = 'listing-documents'


@dataclass
class ListingSummary:
    """One row of the listings table screen"""
    id: int
    title: str
    type: str
    location: str
    price: Any
    price_label: str
    image_url: str = ''
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'location': self.location,
            'price': self.price,
            'price_label': self.price_label,
            'image_url': self.image_url,
            'created_at': self.created_at,
        }


class ListingService(BaseService):
    """Listing reads and the listing save pipeline"""

    def __init__(self, client: BackendClient, lang: Optional[str] = None,
                 image_processor: ImageProcessor = None):
        super().__init__(client, lang)
        self.images = AssetStore(client, IMAGES_BUCKET, processor=image_processor or ImageProcessor())
        self.documents = AssetStore(client, DOCUMENTS_BUCKET)
        self.english = TranslationTable(client, EN_TRANSLATIONS_TABLE, 'listing_id')
        self.telugu = TranslationTable(client, TE_TRANSLATIONS_TABLE, 'listing_id')

    def new_form(self, property_type: PropertyType = PropertyType.PLOT) -> ListingForm:
        return ListingForm(property_type, lang=self.lang)

    # ==================== READ ====================

    def load(self, listing_id: int) -> ListingForm:
        """
        Edit form for a listing.

        The listing and both translations are read concurrently. A missing
        listing raises NotFoundError; a failed translation read only adds a
        warning to the form.
        """
        LOGGER.info("Loading listing %s", listing_id)
        listing_res, en_res, te_res = fan_out(
            lambda: self.client.select(LISTINGS_TABLE, filters={'id': listing_id}, single=True),
            lambda: self.english.fetch(listing_id),
            lambda: self.telugu.fetch(listing_id),
        )

        if not listing_res.ok:
            if listing_res.error.is_not_found:
                raise NotFoundError(self._t('listing.not_found'), cause=listing_res.error)
            raise self._fail('listing.fetch_failed', listing_res.error)

        warnings = []
        for outcome, code in ((en_res, 'en'), (te_res, 'te')):
            if not outcome.ok:
                message = self._t(
                    'listing.translation_fetch_failed',
                    language=language_name(code, self.lang),
                    error=outcome.error.message,
                )
                LOGGER.warning(message)
                warnings.append(message)

        listing = Listing.from_record(listing_res.value)
        form = ListingForm.from_listing(listing, en_res.value, te_res.value, lang=self.lang)
        form.warnings = warnings
        return form

    def list(self, search: str = None) -> List[ListingSummary]:
        """
        Listings newest first, titled by their English translation.

        Args:
            search: Case-insensitive substring of the title
        """
        try:
            rows = self.client.select(LISTINGS_TABLE, order='created_at', descending=True)
        except BackendAPIError as e:
            raise self._fail('listing.list_failed', e)

        try:
            titles = self.english.fetch_titles(row['id'] for row in rows)
        except BackendAPIError as e:
            LOGGER.warning("Could not load listing titles: %s", e.message)
            titles = {}

        no_title = self._t('listing.no_title')
        summaries = []
        for row in rows:
            image_urls = row.get('image_urls') or []
            summaries.append(ListingSummary(
                id=row['id'],
                title=titles.get(row['id']) or no_title,
                type=row.get('type') or '',
                location=row.get('location') or '',
                price=row.get('price'),
                price_label=format_price_in_lakhs_crores(row.get('price')),
                image_url=image_urls[0] if image_urls else '',
                created_at=row.get('created_at'),
            ))

        if search:
            needle = search.strip().lower()
            summaries = [s for s in summaries if needle in s.title.lower()]
        return summaries

    def delete(self, listing_id: int):
        """Delete a listing row (translations cascade in the database)"""
        LOGGER.info("Deleting listing %s", listing_id)
        try:
            self.client.delete(LISTINGS_TABLE, filters={'id': listing_id})
        except BackendAPIError as e:
            raise self._fail('listing.delete_failed', e)

    # ==================== SAVE ====================

    def save(self, form: ListingForm) -> SaveResult:
        """
        Persist a listing form.

        Raises:
            FormValidationError: Required inputs missing or custom keys clash
            SaveError: A pipeline step failed (``step`` names it)
        """
        form.validate()
        edit_mode = form.is_edit_mode
        LOGGER.info("Saving listing %s", form.id if edit_mode else '(new)')

        if edit_mode:
            removed = AssetStore.removed_urls(form.original_image_urls, form.image_urls)
            if removed:
                self._run_step('remove_images', lambda: self.images.remove_urls(removed), 'upload.remove_failed')

        uploaded = []
        for file in form.new_images:
            uploaded.append(self._run_step(
                'upload_images', lambda f=file: self.images.upload(f), 'upload.failed', name=file.name,
            ))

        brochure_url = self._run_step(
            'brochure',
            lambda: self.documents.replace_primary(
                form.original_brochure_url,
                form.details.get('brochure_url') or '',
                form.new_brochure,
                allow_clear=edit_mode,
            ),
            'listing.brochure_upload_failed',
        )

        record = form.build_listing(form.image_urls + uploaded, brochure_url).to_record()
        if edit_mode:
            row = self._run_step(
                'listing',
                lambda: self.client.update(LISTINGS_TABLE, record, filters={'id': form.id}, single=True),
                'listing.save_failed',
            )
        else:
            row = self._run_step(
                'listing',
                lambda: self.client.insert(LISTINGS_TABLE, record, single=True),
                'listing.save_failed',
            )
        saved = Listing.from_record(row)

        self._run_step(
            'en_translation',
            lambda: self.english.upsert(form.english_translation(saved.id)),
            'listing.en_translation_failed',
        )

        telugu = form.telugu_translation(saved.id)
        if telugu.has_title:
            self._run_step('te_translation', lambda: self.telugu.upsert(telugu), 'listing.te_translation_failed')
        elif form.has_te_translation:
            self._run_step(
                'te_translation',
                lambda: self.telugu.delete_for(saved.id),
                'listing.te_translation_delete_failed',
            )

        form.mark_saved(saved)
        message = self._t('listing.saved')
        LOGGER.info("Listing %s saved", saved.id)
        return SaveResult(record=saved, message=message)
