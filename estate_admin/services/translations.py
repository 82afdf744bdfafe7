"""
Per-language translation tables (listing_translations,
listing_translations_telugu, blog_translations).
"""
import logging
from typing import Any, Dict, Iterable, Optional

from ..api.client import BackendClient, BackendAPIError
from ..models.listing import Translation


LOGGER = logging.getLogger(__name__)


class TranslationTable:
    """Rows of ``{<parent_key>, title, description}`` for one language"""

    def __init__(self, client: BackendClient, table: str, parent_key: str):
        self.client = client
        self.table = table
        self.parent_key = parent_key

    def _from_row(self, row: Dict[str, Any]) -> Translation:
        return Translation(
            id=row.get('id'),
            parent_id=row.get(self.parent_key),
            title=row.get('title') or '',
            description=row.get('description') or '',
        )

    def _to_row(self, translation: Translation) -> Dict[str, Any]:
        return {
            self.parent_key: translation.parent_id,
            'title': translation.title,
            'description': translation.description,
        }

    def fetch(self, parent_id: int) -> Optional[Translation]:
        """Translation of a parent record, None when there is none"""
        try:
            row = self.client.select(self.table, filters={self.parent_key: parent_id}, single=True)
        except BackendAPIError as e:
            if e.is_not_found:
                return None
            raise
        return self._from_row(row)

    def fetch_titles(self, parent_ids: Iterable[int]) -> Dict[int, str]:
        """Titles keyed by parent id, for list screens"""
        parent_ids = list(parent_ids)
        if not parent_ids:
            return {}
        rows = self.client.select(
            self.table,
            columns=f'{self.parent_key},title',
            in_filters={self.parent_key: parent_ids},
        )
        return {row[self.parent_key]: row.get('title') or '' for row in rows}

    def upsert(self, translation: Translation) -> Translation:
        """Insert or overwrite the translation of its parent"""
        rows = self.client.upsert(self.table, self._to_row(translation), on_conflict=self.parent_key)
        LOGGER.info("Upserted %s for %s=%s", self.table, self.parent_key, translation.parent_id)
        return self._from_row(rows[0]) if rows else translation

    def insert(self, translation: Translation) -> Translation:
        row = self.client.insert(self.table, self._to_row(translation), single=True)
        return self._from_row(row)

    def update(self, translation: Translation) -> Translation:
        row = self.client.update(self.table, self._to_row(translation), filters={'id': translation.id}, single=True)
        return self._from_row(row)

    def delete_for(self, parent_id: int):
        self.client.delete(self.table, filters={self.parent_key: parent_id})
        LOGGER.info("Deleted %s for %s=%s", self.table, self.parent_key, parent_id)

    def delete(self, translation_id: int):
        self.client.delete(self.table, filters={'id': translation_id})
        LOGGER.info("Deleted %s id=%s", self.table, translation_id)
