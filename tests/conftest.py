"""
Shared fixtures: an in-memory backend with the BackendClient surface and
Pillow-generated images.
"""
import io
import itertools
from collections import defaultdict
from urllib.parse import quote

import pytest
from PIL import Image

from estate_admin.api.client import BackendAPIError, NOT_FOUND_CODE
from estate_admin.models.upload import UploadFile


class FakeBackend:
    """
    Tables and buckets kept in dicts.

    ``fail(op, target)`` makes the next and every later call of ``op`` on
    ``target`` (a table or bucket name) raise BackendAPIError.
    """

    base_url = 'https://demo.supabase.co'

    def __init__(self):
        self.tables = defaultdict(list)
        self.storage = defaultdict(dict)
        self.calls = []
        self._failures = {}
        self._ids = defaultdict(lambda: itertools.count(1))
        self._clock = itertools.count(1)

    # ---- test helpers ----

    def fail(self, op, target, message='boom', code=None, status_code=400):
        self._failures[(op, target)] = BackendAPIError(message, status_code=status_code, code=code)

    def seed(self, table, **row):
        row.setdefault('id', next(self._ids[table]))
        row.setdefault('created_at', self._timestamp())
        self.tables[table].append(row)
        return row

    def ops(self, op=None):
        return [call for call in self.calls if op is None or call[0] == op]

    def _timestamp(self):
        return f"2024-01-01T00:00:{next(self._clock):02d}"

    def _check(self, op, target):
        self.calls.append((op, target))
        error = self._failures.get((op, target))
        if error is not None:
            raise error

    @staticmethod
    def _matches(row, filters=None, in_filters=None):
        for column, value in (filters or {}).items():
            if row.get(column) != value:
                return False
        for column, values in (in_filters or {}).items():
            if row.get(column) not in list(values):
                return False
        return True

    @staticmethod
    def _not_found():
        return BackendAPIError(
            'JSON object requested, multiple (or no) rows returned',
            status_code=406,
            code=NOT_FOUND_CODE,
        )

    def _new_row(self, table, values):
        row = dict(values)
        if row.get('id') is None:
            row['id'] = next(self._ids[table])
        row.setdefault('created_at', self._timestamp())
        if table in ('listings', 'blogs'):
            row.setdefault('slug', f"{table}-{row['id']}")
        if table == 'blogs':
            row['updated_at'] = row['created_at']
        return row

    # ---- client surface ----

    def select(self, table, columns='*', filters=None, in_filters=None, order=None,
               descending=False, limit=None, single=False):
        self._check('select', table)
        rows = [dict(r) for r in self.tables[table] if self._matches(r, filters, in_filters)]
        if order:
            rows.sort(key=lambda r: r.get(order) or '', reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        if single:
            if len(rows) != 1:
                raise self._not_found()
            return rows[0]
        return rows

    def insert(self, table, values, returning=True, single=False):
        self._check('insert', table)
        batch = values if isinstance(values, list) else [values]
        rows = [self._new_row(table, v) for v in batch]
        self.tables[table].extend(rows)
        if not returning:
            return None
        copies = [dict(r) for r in rows]
        return copies[0] if single else copies

    def update(self, table, values, filters, single=False):
        self._check('update', table)
        matched = [r for r in self.tables[table] if self._matches(r, filters)]
        if single and len(matched) != 1:
            raise self._not_found()
        for row in matched:
            row.update(values)
            if table == 'blogs':
                row['updated_at'] = self._timestamp()
        copies = [dict(r) for r in matched]
        return copies[0] if single else copies

    def upsert(self, table, values, on_conflict=None):
        self._check('upsert', table)
        key = on_conflict or 'id'
        batch = values if isinstance(values, list) else [values]
        result = []
        for value in batch:
            existing = next((r for r in self.tables[table] if key in value and r.get(key) == value[key]), None)
            if existing is not None:
                existing.update(value)
                result.append(dict(existing))
            else:
                row = self._new_row(table, value)
                self.tables[table].append(row)
                result.append(dict(row))
        return result

    def delete(self, table, filters):
        self._check('delete', table)
        removed = [r for r in self.tables[table] if self._matches(r, filters)]
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, filters)]
        return removed

    def upload(self, bucket, path, content, content_type=None, upsert=False):
        self._check('upload', bucket)
        if path in self.storage[bucket] and not upsert:
            raise BackendAPIError('The resource already exists', status_code=409)
        self.storage[bucket][path] = (content, content_type)
        return {'Key': f'{bucket}/{path}'}

    def remove(self, bucket, paths):
        self._check('remove', bucket)
        removed = []
        for path in paths:
            if self.storage[bucket].pop(path, None) is not None:
                removed.append({'name': path})
        return removed

    def get_public_url(self, bucket, path):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"


def make_image_bytes(width=32, height=24, fmt='PNG', color=(200, 30, 30)):
    img = Image.new('RGB', (width, height), color)
    output = io.BytesIO()
    img.save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def image_file():
    def factory(name='photo.png', width=32, height=24, fmt='PNG'):
        return UploadFile(name=name, content=make_image_bytes(width, height, fmt), content_type='image/png')
    return factory


@pytest.fixture
def pdf_file():
    def factory(name='brochure.pdf'):
        return UploadFile(name=name, content=b'%PDF-1.4 test', content_type='application/pdf')
    return factory
