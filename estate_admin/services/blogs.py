"""
Blog Service

Blog posts keep their English copy on the ``blogs`` row and an optional
Telugu translation in ``blog_translations``. Saving replaces the cover
image first, then writes the row, then syncs the translation.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .assets import AssetStore
from .base import BaseService, NotFoundError, SaveResult
from .translations import TranslationTable
from ..api.client import BackendClient, BackendAPIError
from ..forms.blog_form import BlogForm
from ..images.processor import ImageProcessor
from ..models.content import Blog
from ..utils.parallel import fan_out


LOGGER = logging.getLogger(__name__)

BLOGS_TABLE = 'blogs'
TRANSLATIONS_TABLE = 'blog_translations'
IMAGES_BUCKET = 'blog-images'


@dataclass
class BlogSummary:
    id: int
    title: str
    cover_image: str = ''
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'cover_image': self.cover_image,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


class BlogService(BaseService):

    def __init__(self, client: BackendClient, lang: Optional[str] = None,
                 image_processor: ImageProcessor = None):
        super().__init__(client, lang)
        self.images = AssetStore(client, IMAGES_BUCKET, processor=image_processor or ImageProcessor())
        self.telugu = TranslationTable(client, TRANSLATIONS_TABLE, 'blog_id')

    def new_form(self) -> BlogForm:
        return BlogForm(lang=self.lang)

    def load(self, blog_id: int) -> BlogForm:
        """Edit form for a blog post and its Telugu translation"""
        LOGGER.info("Loading blog %s", blog_id)
        blog_res, te_res = fan_out(
            lambda: self.client.select(BLOGS_TABLE, filters={'id': blog_id}, single=True),
            lambda: self.telugu.fetch(blog_id),
        )

        if not blog_res.ok:
            if blog_res.error.is_not_found:
                raise NotFoundError(self._t('blog.not_found'), cause=blog_res.error)
            raise self._fail('blog.fetch_failed', blog_res.error)

        warnings = []
        if not te_res.ok:
            message = self._t('blog.translation_fetch_failed', error=te_res.error.message)
            LOGGER.warning(message)
            warnings.append(message)

        form = BlogForm.from_blog(Blog.from_record(blog_res.value), te_res.value, lang=self.lang)
        form.warnings = warnings
        return form

    def list(self) -> List[BlogSummary]:
        """Blog posts, newest first"""
        try:
            rows = self.client.select(BLOGS_TABLE, order='created_at', descending=True)
        except BackendAPIError as e:
            raise self._fail('blog.list_failed', e)
        return [
            BlogSummary(
                id=row['id'],
                title=row.get('title') or '',
                cover_image=row.get('cover_image') or '',
                created_at=row.get('created_at'),
                updated_at=row.get('updated_at'),
            )
            for row in rows
        ]

    def delete(self, blog_id: int):
        LOGGER.info("Deleting blog %s", blog_id)
        try:
            self.client.delete(BLOGS_TABLE, filters={'id': blog_id})
        except BackendAPIError as e:
            raise self._fail('blog.delete_failed', e)

    def save(self, form: BlogForm) -> SaveResult:
        """
        Persist a blog form.

        A failed delete of a Telugu translation the user cleared is not
        fatal: it is logged and returned as a warning.

        Raises:
            FormValidationError: English title missing
            SaveError: Cover upload, blog row or translation write failed
        """
        form.validate()
        LOGGER.info("Saving blog %s", form.id if form.is_edit_mode else '(new)')

        cover_url = self._run_step(
            'cover_image',
            lambda: self.images.replace_primary(
                form.original_cover_image_url,
                form.cover_image,
                form.new_cover_image,
            ),
            'blog.cover_upload_failed',
        )

        record = form.build_blog(cover_url).to_record()
        if form.is_edit_mode:
            row = self._run_step(
                'blog',
                lambda: self.client.update(BLOGS_TABLE, record, filters={'id': form.id}, single=True),
                'blog.save_failed',
            )
        else:
            row = self._run_step(
                'blog',
                lambda: self.client.insert(BLOGS_TABLE, record, single=True),
                'blog.save_failed',
            )
        saved = Blog.from_record(row)

        warnings = []
        te_translation_id = form.te_translation_id
        telugu = form.telugu_translation(saved.id)
        if telugu.has_title:
            if telugu.id is not None:
                stored = self._run_step(
                    'te_translation', lambda: self.telugu.update(telugu), 'blog.te_translation_failed',
                )
            else:
                stored = self._run_step(
                    'te_translation', lambda: self.telugu.insert(telugu), 'blog.te_translation_failed',
                )
            te_translation_id = stored.id
        elif telugu.id is not None:
            try:
                self.telugu.delete(telugu.id)
                te_translation_id = None
            except BackendAPIError as e:
                message = self._t('blog.te_translation_delete_failed', error=e.message)
                LOGGER.warning(message)
                warnings.append(message)

        form.mark_saved(saved, te_translation_id)
        LOGGER.info("Blog %s saved", saved.id)
        return SaveResult(record=saved, message=self._t('blog.saved'), warnings=warnings)
