"""
Blog post form: English copy on the blog row, optional Telugu translation,
one cover image.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from .base import BaseForm, FormValidationError, load_upload
from ..models.content import Blog
from ..models.listing import Translation
from ..models.upload import UploadFile


class BlogForm(BaseForm):
    TEXT_FIELDS = ('en_title', 'en_description', 'te_title', 'te_description')

    def __init__(self, lang: Optional[str] = None):
        super().__init__(lang)
        self.id: Optional[int] = None
        self.cover_image = ''
        self.new_cover_image: Optional[UploadFile] = None
        self.original_cover_image_url = ''
        self.en_title = ''
        self.en_description = ''
        self.te_title = ''
        self.te_description = ''
        self.te_translation_id: Optional[int] = None

    @property
    def is_edit_mode(self) -> bool:
        return self.id is not None

    def attach_cover_image(self, file: UploadFile):
        # the stored URL is dropped right away; the new file replaces it on save
        self.new_cover_image = file
        self.cover_image = ''

    def remove_cover_image(self):
        self.new_cover_image = None
        self.cover_image = ''

    def validate(self):
        if not self.en_title.strip():
            raise FormValidationError([self._t('form.required', field='Title (English)')])

    def build_blog(self, cover_image_url: str) -> Blog:
        return Blog(
            id=self.id,
            title=self.en_title,
            description=self.en_description,
            cover_image=cover_image_url or None,
        )

    def telugu_translation(self, blog_id: int) -> Translation:
        return Translation(
            id=self.te_translation_id,
            parent_id=blog_id,
            title=self.te_title,
            description=self.te_description,
        )

    def mark_saved(self, blog: Blog, te_translation_id: Optional[int]):
        self.id = blog.id
        self.cover_image = blog.cover_image or ''
        self.original_cover_image_url = self.cover_image
        self.new_cover_image = None
        self.te_translation_id = te_translation_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'cover_image': self.cover_image,
            'en_title': self.en_title,
            'en_description': self.en_description,
            'te_title': self.te_title,
            'te_description': self.te_description,
            'warnings': list(self.warnings),
        }

    @classmethod
    def from_blog(cls, blog: Blog, te: Optional[Translation] = None, lang: Optional[str] = None) -> 'BlogForm':
        form = cls(lang=lang)
        form.id = blog.id
        form.cover_image = blog.cover_image or ''
        form.original_cover_image_url = form.cover_image
        form.en_title = blog.title or ''
        form.en_description = blog.description or ''
        if te is not None:
            form.te_title = te.title or ''
            form.te_description = te.description or ''
            form.te_translation_id = te.id
        return form

    def apply(self, data: Dict[str, Any], base_dir: Optional[Path] = None):
        """Apply a form document: text fields plus ``cover_image`` (path, or empty to remove)"""
        self.apply_text_fields(data)
        if 'cover_image' in data:
            if data['cover_image']:
                self.attach_cover_image(load_upload(data['cover_image'], base_dir))
            else:
                self.remove_cover_image()
