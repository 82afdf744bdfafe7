"""
Singleton content forms (homepage hero, site footer)
"""
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .base import BaseForm, FormError, load_upload
from ..models.content import HeroContent, FooterContent
from ..models.upload import UploadFile


class ContentForm(BaseForm):
    """Form editing the text columns of a singleton content record"""

    def __init__(self, content, lang: Optional[str] = None):
        super().__init__(lang)
        self.content = content

    def set_field(self, name: str, value: Any):
        if name not in self.TEXT_FIELDS:
            raise FormError(self._t('form.unknown_field', field=name, type=type(self.content).__name__))
        setattr(self.content, name, '' if value is None else str(value))

    def apply(self, data: Dict[str, Any], base_dir: Optional[Path] = None):
        self.apply_text_fields(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self.content)


class HeroForm(ContentForm):
    TEXT_FIELDS = tuple(f.name for f in fields(HeroContent) if f.name != 'background_image_url')

    def __init__(self, content: HeroContent = None, lang: Optional[str] = None):
        super().__init__(content or HeroContent(), lang)
        self.new_background_image: Optional[UploadFile] = None
        self.original_background_image_url = self.content.background_image_url or ''

    def attach_background_image(self, file: UploadFile):
        self.new_background_image = file
        self.content.background_image_url = ''

    def remove_background_image(self):
        self.new_background_image = None
        self.content.background_image_url = ''

    def mark_saved(self, background_image_url: str):
        self.content.background_image_url = background_image_url
        self.original_background_image_url = background_image_url
        self.new_background_image = None

    def apply(self, data: Dict[str, Any], base_dir: Optional[Path] = None):
        """Apply a form document: text fields plus ``background_image`` (path, or empty to remove)"""
        super().apply(data, base_dir)
        if 'background_image' in data:
            if data['background_image']:
                self.attach_background_image(load_upload(data['background_image'], base_dir))
            else:
                self.remove_background_image()


class FooterForm(ContentForm):
    TEXT_FIELDS = tuple(f.name for f in fields(FooterContent))

    def __init__(self, content: FooterContent = None, lang: Optional[str] = None):
        super().__init__(content or FooterContent(), lang)
