"""
Blog and site content models
"""
from dataclasses import dataclass, asdict, fields
from typing import Optional, Dict, Any


@dataclass
class Blog:
    """A blog post; the English copy lives on the row itself"""
    title: str
    description: str = ''
    cover_image: Optional[str] = None
    id: Optional[int] = None
    slug: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        # updated_at is maintained by a database trigger
        return {
            'title': self.title,
            'description': self.description,
            'cover_image': self.cover_image or None,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> 'Blog':
        return cls(
            title=data.get('title') or '',
            description=data.get('description') or '',
            cover_image=data.get('cover_image'),
            id=data.get('id'),
            slug=data.get('slug'),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )


class SingletonContent:
    """Mixin for single-row content tables (fixed id)"""

    @classmethod
    def from_record(cls, data: Optional[Dict[str, Any]]):
        data = data or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: (v if v is not None else '') for k, v in data.items() if k in known})

    def to_record(self, record_id: int) -> Dict[str, Any]:
        return {'id': record_id, **asdict(self)}


@dataclass
class HeroContent(SingletonContent):
    """Homepage hero section"""
    background_image_url: str = ''
    hero_title_en: str = ''
    hero_title_te: str = ''
    hero_subtitle_en: str = ''
    hero_subtitle_te: str = ''


@dataclass
class FooterContent(SingletonContent):
    """Site footer: company info, contact details, social links, copyright"""
    company_name: str = ''
    hero_subtitle_en: str = ''
    hero_subtitle_te: str = ''
    contact_us_title_en: str = ''
    contact_us_title_te: str = ''
    phone_number: str = ''
    email: str = ''
    company_address: str = ''
    follow_us_title_en: str = ''
    follow_us_title_te: str = ''
    instagram_url: str = ''
    facebook_url: str = ''
    youtube_url: str = ''
    copyright_notice_en: str = ''
    copyright_notice_te: str = ''
