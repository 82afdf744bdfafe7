"""
Utilities Package
"""
from .formatters import (
    format_price_in_lakhs_crores,
    parse_number,
    parse_bool,
    slugify_detail_key,
    extract_map_embed_src,
    upload_object_path,
    storage_path_from_url,
    file_name_from_url,
)
from .parallel import fan_out, Outcome

__all__ = [
    'format_price_in_lakhs_crores',
    'parse_number',
    'parse_bool',
    'slugify_detail_key',
    'extract_map_embed_src',
    'upload_object_path',
    'storage_path_from_url',
    'file_name_from_url',
    'fan_out',
    'Outcome',
]
