"""
Files attached to a form before they are uploaded to storage
"""
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass
class UploadFile:
    """A file picked for upload: original name, bytes and MIME type"""
    name: str
    content: bytes
    content_type: str = 'application/octet-stream'

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'UploadFile':
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content=path.read_bytes(),
            content_type=content_type or 'application/octet-stream',
        )

    @property
    def size(self) -> int:
        return len(self.content)
