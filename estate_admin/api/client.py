"""
Estate Admin Backend Client

Thin client for the hosted backend used by the admin console:
- Table endpoints (PostgREST):  /rest/v1/<table>
- Storage endpoints:            /storage/v1/object/<bucket>/<path>

Every call is a single request/response. Nothing is retried: a failure is
raised as BackendAPIError and the caller decides what to tell the user.
"""
import json
import logging
from typing import Optional, Dict, Any, List, Iterable, Union
from urllib.parse import quote

import requests

from .config import Config


LOGGER = logging.getLogger(__name__)

# PostgREST code for "JSON object requested, multiple (or no) rows returned"
NOT_FOUND_CODE = 'PGRST116'

SINGLE_OBJECT_MEDIA_TYPE = 'application/vnd.pgrst.object+json'


class BackendAPIError(Exception):
    """Custom exception for backend API errors"""
    def __init__(self, message: str, status_code: int = None, code: str = None, response: dict = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.response = response
        super().__init__(self.message)

    @property
    def is_not_found(self) -> bool:
        """True when a single-row lookup matched no row"""
        return self.code == NOT_FOUND_CODE


def _format_filter_value(value: Any) -> str:
    if value is None:
        return 'is.null'
    if isinstance(value, bool):
        return f"is.{str(value).lower()}"
    return f"eq.{value}"


def _format_in_values(values: Iterable[Any]) -> str:
    parts = []
    for value in values:
        text = str(value)
        if any(ch in text for ch in ',()" '):
            text = '"' + text.replace('"', '\\"') + '"'
        parts.append(text)
    return f"in.({','.join(parts)})"


class BackendClient:
    """
    Backend-as-a-service client

    Exposes select/insert/update/upsert/delete on named tables and
    upload/remove/get_public_url on named storage buckets.
    """

    def __init__(self, base_url: str = None, api_key: str = None, access_token: str = None,
                 timeout: int = None, session: requests.Session = None):
        """
        Initialize the backend client

        Args:
            base_url: Project URL (uses env if not provided)
            api_key: Project API key (uses env if not provided)
            access_token: Staff user's JWT; falls back to the API key
            timeout: Request timeout in seconds
            session: Pre-built requests session (mainly for tests)
        """
        self.base_url = (base_url or Config.BACKEND_URL).rstrip('/')
        self.api_key = api_key or Config.BACKEND_KEY
        self.access_token = access_token or Config.ACCESS_TOKEN or self.api_key
        self.timeout = timeout or Config.REQUEST_TIMEOUT

        if not self.base_url or not self.api_key:
            raise BackendAPIError(
                "Backend URL and API key are required. "
                "Set ESTATE_BACKEND_URL and ESTATE_BACKEND_KEY."
            )

        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.access_token}',
            'Accept': 'application/json',
        })

    @classmethod
    def from_config(cls) -> 'BackendClient':
        """Build a client from Config values"""
        return cls(
            base_url=Config.BACKEND_URL,
            api_key=Config.BACKEND_KEY,
            access_token=Config.ACCESS_TOKEN,
            timeout=Config.REQUEST_TIMEOUT,
        )

    # ==================== REQUEST HANDLER ====================

    def _make_request(
        self,
        method: str,
        endpoint: str,
        json_body: Any = None,
        params: Dict[str, Any] = None,
        headers: Dict[str, str] = None,
        data: bytes = None,
    ) -> Any:
        """
        Make a single API request

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: Path below the project URL
            json_body: JSON request body
            params: Query parameters
            headers: Extra headers for this request
            data: Raw request body (storage uploads)

        Returns:
            Decoded JSON body, or None for empty responses
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        LOGGER.debug("%s %s params=%s", method, url, params)

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                data=data,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BackendAPIError(f"Request failed: {str(e)}")

        LOGGER.debug("Response Status: %s", response.status_code)

        raw_text = (response.text or '').strip()
        response_data = None
        if raw_text:
            try:
                response_data = response.json()
            except (json.JSONDecodeError, ValueError):
                response_data = {'raw': raw_text[:500]}

        if not response.ok:
            error_msg = None
            code = None
            if isinstance(response_data, dict):
                error_msg = response_data.get('message') or response_data.get('error') or response_data.get('raw')
                code = response_data.get('code')
                if code is not None:
                    code = str(code)
                details = response_data.get('details')
                if details and isinstance(details, str) and details not in (error_msg or ''):
                    LOGGER.debug("Backend error details: %s", details)
            if not error_msg:
                error_msg = f'HTTP {response.status_code}'

            raise BackendAPIError(
                message=error_msg,
                status_code=response.status_code,
                code=code,
                response=response_data,
            )

        return response_data

    # ==================== CONNECTION TEST ====================

    def test_connection(self) -> Dict[str, Any]:
        """
        Test the connection and credentials

        Returns:
            Connection test result
        """
        try:
            self.select('hero_content', columns='id', limit=1)
            return {
                'success': True,
                'message': 'Successfully connected to the backend',
                'base_url': self.base_url,
                'user_token': self.access_token != self.api_key,
            }
        except BackendAPIError as e:
            return {
                'success': False,
                'message': str(e.message),
                'status_code': e.status_code,
                'base_url': self.base_url,
            }

    # ==================== TABLE OPERATIONS ====================

    @staticmethod
    def _filter_params(filters: Dict[str, Any] = None, in_filters: Dict[str, Iterable[Any]] = None) -> Dict[str, str]:
        params = {}
        for column, value in (filters or {}).items():
            params[column] = _format_filter_value(value)
        for column, values in (in_filters or {}).items():
            params[column] = _format_in_values(values)
        return params

    def select(
        self,
        table: str,
        columns: str = '*',
        filters: Dict[str, Any] = None,
        in_filters: Dict[str, Iterable[Any]] = None,
        order: str = None,
        descending: bool = False,
        limit: int = None,
        single: bool = False,
    ) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Read rows from a table

        Args:
            table: Table name
            columns: Column list ("*" for all)
            filters: Equality filters {column: value}
            in_filters: Membership filters {column: [values]}
            order: Column to order by
            descending: Order direction
            limit: Maximum number of rows
            single: Return exactly one row as a dict; zero rows raise a
                BackendAPIError whose is_not_found is True

        Returns:
            List of rows, or one row when single is set
        """
        params = {'select': columns}
        params.update(self._filter_params(filters, in_filters))
        if order:
            params['order'] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params['limit'] = limit

        headers = {'Accept': SINGLE_OBJECT_MEDIA_TYPE} if single else None
        result = self._make_request('GET', f'/rest/v1/{table}', params=params, headers=headers)
        if single:
            return result
        return result or []

    def insert(self, table: str, values: Union[Dict[str, Any], List[Dict[str, Any]]],
               returning: bool = True, single: bool = False) -> Any:
        """
        Insert one or more rows

        Args:
            table: Table name
            values: Row or list of rows
            returning: Ask for the inserted rows back
            single: Return the inserted row as a dict

        Returns:
            Inserted rows (or one row), None when returning is off
        """
        headers = {'Prefer': 'return=representation' if returning else 'return=minimal'}
        if single:
            headers['Accept'] = SINGLE_OBJECT_MEDIA_TYPE
        params = {'select': '*'} if returning else None
        return self._make_request('POST', f'/rest/v1/{table}', json_body=values, params=params, headers=headers)

    def update(self, table: str, values: Dict[str, Any], filters: Dict[str, Any],
               single: bool = False) -> Any:
        """
        Update the rows matching filters

        Args:
            table: Table name
            values: Columns to change
            filters: Equality filters selecting the rows
            single: Return the updated row as a dict

        Returns:
            Updated rows (or one row)
        """
        if not filters:
            raise BackendAPIError("Refusing to update without filters")
        headers = {'Prefer': 'return=representation'}
        if single:
            headers['Accept'] = SINGLE_OBJECT_MEDIA_TYPE
        params = {'select': '*'}
        params.update(self._filter_params(filters))
        return self._make_request('PATCH', f'/rest/v1/{table}', json_body=values, params=params, headers=headers)

    def upsert(self, table: str, values: Union[Dict[str, Any], List[Dict[str, Any]]],
               on_conflict: str = None) -> List[Dict[str, Any]]:
        """
        Insert rows, merging into existing ones on a unique key

        Args:
            table: Table name
            values: Row or list of rows
            on_conflict: Unique column(s) to resolve conflicts on (primary key if omitted)

        Returns:
            Upserted rows
        """
        headers = {'Prefer': 'resolution=merge-duplicates,return=representation'}
        params = {'select': '*'}
        if on_conflict:
            params['on_conflict'] = on_conflict
        return self._make_request('POST', f'/rest/v1/{table}', json_body=values, params=params, headers=headers) or []

    def delete(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Delete the rows matching filters

        Args:
            table: Table name
            filters: Equality filters selecting the rows

        Returns:
            Deleted rows
        """
        if not filters:
            raise BackendAPIError("Refusing to delete without filters")
        headers = {'Prefer': 'return=representation'}
        params = self._filter_params(filters)
        return self._make_request('DELETE', f'/rest/v1/{table}', params=params, headers=headers) or []

    # ==================== STORAGE OPERATIONS ====================

    def upload(self, bucket: str, path: str, content: bytes, content_type: str = None,
               upsert: bool = False) -> Dict[str, Any]:
        """
        Upload a file to a storage bucket

        Args:
            bucket: Bucket name
            path: Object path inside the bucket
            content: File bytes
            content_type: MIME type of the file
            upsert: Overwrite an existing object at the same path

        Returns:
            Storage response (object key)
        """
        headers = {
            'Content-Type': content_type or 'application/octet-stream',
            'x-upsert': 'true' if upsert else 'false',
        }
        endpoint = f"/storage/v1/object/{bucket}/{quote(path)}"
        return self._make_request('POST', endpoint, data=content, headers=headers) or {}

    def remove(self, bucket: str, paths: List[str]) -> List[Dict[str, Any]]:
        """
        Remove objects from a storage bucket

        Args:
            bucket: Bucket name
            paths: Object paths inside the bucket

        Returns:
            Removed object descriptions
        """
        if not paths:
            return []
        return self._make_request(
            'DELETE', f"/storage/v1/object/{bucket}", json_body={'prefixes': list(paths)}
        ) or []

    def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object (no request is made)"""
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"
