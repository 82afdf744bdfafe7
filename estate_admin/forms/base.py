"""
Shared form plumbing: errors, localized messages, plain text fields.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..api.config import Config
from ..models.upload import UploadFile
from ..i18n import normalize_language, translate


class FormError(ValueError):
    """Invalid edit of a form (unknown field, bad choice, ...)"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class FormValidationError(FormError):
    """A form cannot be submitted; ``errors`` lists every problem found"""
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


class AmenityConflictError(FormError):
    """A custom amenity name collides with a predefined or custom one"""
    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class BaseForm:
    """
    Base class for the admin forms.

    ``TEXT_FIELDS`` lists the attributes editable through set_field().
    """
    TEXT_FIELDS: Tuple[str, ...] = ()

    def __init__(self, lang: Optional[str] = None):
        self.lang = normalize_language(lang or Config.DEFAULT_LANGUAGE)
        self.warnings: List[str] = []

    def _t(self, key: str, /, **vars: Any) -> str:
        return translate(key, self.lang, **vars)

    def set_field(self, name: str, value: Any):
        if name not in self.TEXT_FIELDS:
            raise FormError(self._t('form.unknown_field', field=name, type=type(self).__name__))
        setattr(self, name, '' if value is None else str(value))

    def apply_text_fields(self, data: Dict[str, Any]):
        for name in self.TEXT_FIELDS:
            if name in data:
                self.set_field(name, data[name])


def load_upload(path: str, base_dir: Optional[Path] = None) -> UploadFile:
    """Read a local file referenced from a form file"""
    file_path = Path(path)
    if base_dir is not None and not file_path.is_absolute():
        file_path = Path(base_dir) / file_path
    return UploadFile.from_path(file_path)
