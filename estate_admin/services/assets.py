"""
Asset lifecycle for one storage bucket: files are uploaded before the
record that links them is written, and files dropped from a record are
deleted from storage.
"""
import logging
from typing import List, Optional

from ..api.client import BackendClient
from ..images.processor import ImageProcessor
from ..models.upload import UploadFile
from ..utils.formatters import upload_object_path, storage_path_from_url


LOGGER = logging.getLogger(__name__)


class AssetStore:
    """Uploads to and removes from a single bucket"""

    def __init__(self, client: BackendClient, bucket: str, prefix: str = 'public',
                 processor: Optional[ImageProcessor] = None):
        """
        Args:
            client: Backend client
            bucket: Storage bucket name
            prefix: Folder new uploads go into
            processor: Image processor applied before upload (image buckets only)
        """
        self.client = client
        self.bucket = bucket
        self.prefix = prefix
        self.processor = processor

    def object_path(self, url: str) -> Optional[str]:
        return storage_path_from_url(url, self.bucket)

    def upload(self, file: UploadFile) -> str:
        """Upload a file and return its public URL"""
        if self.processor is not None:
            file = self.processor.prepare(file)
        path = upload_object_path(self.prefix, file.name)
        self.client.upload(self.bucket, path, file.content, file.content_type)
        LOGGER.info("Uploaded %s to %s/%s (%d bytes)", file.name, self.bucket, path, file.size)
        return self.client.get_public_url(self.bucket, path)

    def remove_urls(self, urls: List[str]) -> List[str]:
        """Delete the objects behind public URLs; returns the removed paths"""
        paths = []
        for url in urls:
            path = self.object_path(url)
            if path is None:
                LOGGER.warning("Skipping %s: not an object of bucket %s", url, self.bucket)
                continue
            paths.append(path)
        if paths:
            self.client.remove(self.bucket, paths)
            LOGGER.info("Removed %d object(s) from %s", len(paths), self.bucket)
        return paths

    @staticmethod
    def removed_urls(original: List[str], current: List[str]) -> List[str]:
        """URLs present originally but no longer kept"""
        return [url for url in original if url not in current]

    def replace_primary(self, original_url: str, current_url: str, new_file: Optional[UploadFile],
                        allow_clear: bool = True) -> str:
        """
        Resolve a single-file field (cover, background, brochure).

        A new file deletes the previous object first, then is uploaded.
        Without a new file, a cleared field deletes the previous object.

        Returns:
            URL to store ('' when the field ends up empty)
        """
        if new_file is not None:
            if original_url:
                self.remove_urls([original_url])
            return self.upload(new_file)

        if allow_clear and original_url and not current_url:
            self.remove_urls([original_url])
            return ''
        return current_url or ''
