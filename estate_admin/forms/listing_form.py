"""
Listing form model.

Holds what staff are editing on the listing screen: the property type
discriminator, the type-dependent details (numbers kept as text until
submit), selected/custom amenities, custom key/value details, images,
brochure and the English/Telugu translations.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .base import BaseForm, FormError, FormValidationError, AmenityConflictError, load_upload
from ..models.amenities import amenities_for, find_predefined, predefined_amenity_names
from ..models.listing import (
    PropertyType,
    Amenity,
    FieldSpec,
    LISTING_FIELDS,
    NUMERIC_FIELDS,
    Listing,
    Translation,
    details_class_for,
    field_specs,
)
from ..models.upload import UploadFile
from ..utils.formatters import (
    parse_number,
    parse_bool,
    slugify_detail_key,
    extract_map_embed_src,
    file_name_from_url,
)


@dataclass
class CustomDetail:
    """One row of the custom key/value editor"""
    key: str = ''
    value: str = ''


def empty_details(property_type: PropertyType) -> Dict[str, Any]:
    """Blank details for a property type: its fields at their defaults, no amenities"""
    details = {spec.name: spec.empty_value() for spec in field_specs(property_type)}
    details['amenities'] = []
    return details


class ListingForm(BaseForm):
    """
    Create/edit form for a property listing.

    Switching ``type`` resets the details to the new type's defaults and
    drops custom details and custom amenities.
    """

    TEXT_FIELDS = (
        'location', 'price', 'map_embed',
        'en_title', 'en_description', 'te_title', 'te_description',
    )

    def __init__(self, property_type: PropertyType = PropertyType.PLOT, lang: Optional[str] = None):
        super().__init__(lang)
        self.id: Optional[int] = None
        self.type = PropertyType(property_type)
        self.location = ''
        self.price = ''
        self.image_urls: List[str] = []
        self.new_images: List[UploadFile] = []
        self.map_embed = ''
        self.details: Dict[str, Any] = empty_details(self.type)

        self.en_title = ''
        self.en_description = ''
        self.te_title = ''
        self.te_description = ''

        self.custom_details: List[CustomDetail] = []
        self.custom_amenities: List[Amenity] = []
        self.new_brochure: Optional[UploadFile] = None

        # State as last loaded/saved; the save pipeline diffs against it
        self.original_image_urls: List[str] = []
        self.original_brochure_url = ''
        self.has_te_translation = False

    @property
    def is_edit_mode(self) -> bool:
        return self.id is not None

    # ==================== FIELDS ====================

    def fields(self) -> Tuple[FieldSpec, ...]:
        """Inputs shown for the current property type"""
        return field_specs(self.type)

    def _spec(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields():
            if spec.name == name:
                return spec
        return None

    def set_type(self, property_type: PropertyType):
        self.type = PropertyType(property_type)
        self.details = empty_details(self.type)
        self.custom_details = []
        self.custom_amenities = []

    def set_field(self, name: str, value: Any):
        if name == 'type':
            self.set_type(value)
        elif name == 'map_embed':
            # a full <iframe> snippet may be pasted
            self.map_embed = extract_map_embed_src('' if value is None else str(value))
        else:
            super().set_field(name, value)

    def set_detail(self, name: str, value: Any):
        spec = self._spec(name)
        if spec is None:
            raise FormError(self._t('form.unknown_field', field=name, type=self.type.value))

        if spec.kind == 'bool':
            flag = parse_bool(value)
            if flag is None:
                raise FormError(self._t('form.invalid_choice', value=value, field=spec.label))
            self.details[name] = flag
        elif spec.kind == 'choice':
            value = '' if value is None else str(value)
            if value not in spec.choices:
                raise FormError(self._t('form.invalid_choice', value=value, field=spec.label))
            self.details[name] = value
        else:
            self.details[name] = '' if value is None else str(value)

    # ==================== AMENITIES ====================

    def available_amenities(self) -> Dict[str, List[Amenity]]:
        """Predefined amenities for the current type, by category"""
        return amenities_for(self.type)

    @property
    def selected_amenities(self) -> List[Amenity]:
        return self.details.setdefault('amenities', [])

    def selected_amenity_names(self) -> List[str]:
        return [a.name for a in self.selected_amenities]

    def is_amenity_selected(self, name: str) -> bool:
        return any(a.name == name for a in self.selected_amenities)

    def toggle_amenity(self, amenity: Amenity):
        current = self.selected_amenities
        if self.is_amenity_selected(amenity.name):
            self.details['amenities'] = [a for a in current if a.name != amenity.name]
        else:
            self.details['amenities'] = current + [amenity]

    def add_custom_amenity(self, name: str) -> Optional[Amenity]:
        """
        Add a staff-defined amenity and select it.

        Blank names are ignored. Names matching a predefined amenity of the
        current type, or an already added custom one, are rejected
        regardless of case.
        """
        trimmed = (name or '').strip()
        if not trimmed:
            return None

        if find_predefined(self.type, trimmed) is not None:
            raise AmenityConflictError(trimmed, self._t('amenities.predefined_conflict', name=trimmed))
        lowered = trimmed.lower()
        if any(a.name.lower() == lowered for a in self.custom_amenities):
            raise AmenityConflictError(trimmed, self._t('amenities.custom_conflict', name=trimmed))

        amenity = Amenity(name=trimmed)
        self.custom_amenities.append(amenity)
        self.toggle_amenity(amenity)
        return amenity

    def select_amenities(self, names: List[str]):
        """Make sure each named amenity is selected, creating custom ones as needed"""
        for name in names:
            trimmed = (name or '').strip()
            if not trimmed:
                continue
            amenity = find_predefined(self.type, trimmed)
            if amenity is None:
                amenity = next((a for a in self.custom_amenities if a.name.lower() == trimmed.lower()), None)
            if amenity is None:
                self.add_custom_amenity(trimmed)
            elif not self.is_amenity_selected(amenity.name):
                self.toggle_amenity(amenity)

    # ==================== CUSTOM DETAILS ====================

    def add_custom_detail(self) -> CustomDetail:
        row = CustomDetail()
        self.custom_details.append(row)
        return row

    def update_custom_detail(self, index: int, field: str, value: str):
        if field not in ('key', 'value'):
            raise FormError(self._t('form.custom_field_name', field=field))
        setattr(self.custom_details[index], field, '' if value is None else str(value))

    def remove_custom_detail(self, index: int):
        del self.custom_details[index]

    # ==================== FILES ====================

    def attach_images(self, files: List[UploadFile]):
        self.new_images.extend(files)

    def remove_existing_image(self, index: int):
        del self.image_urls[index]

    def attach_brochure(self, file: UploadFile):
        self.new_brochure = file

    def remove_brochure(self):
        self.new_brochure = None
        self.details['brochure_url'] = ''

    # ==================== SUBMIT ====================

    def _custom_key_errors(self) -> List[str]:
        standard = set(details_class_for(self.type).standard_keys())
        errors = []
        for row in self.custom_details:
            key = slugify_detail_key(row.key)
            if key and key in standard:
                errors.append(self._t('form.custom_key_clash', key=key))
        return errors

    def validate(self):
        """Raise FormValidationError listing every missing or invalid input"""
        errors = []
        if not self.location.strip():
            errors.append(self._t('form.required', field='Location'))
        if parse_number(self.price) is None:
            errors.append(self._t('form.price_invalid'))
        if not self.en_title.strip():
            errors.append(self._t('form.required', field='Title (English)'))

        for spec in LISTING_FIELDS[self.type]:
            if not spec.required:
                continue
            value = self.details.get(spec.name)
            if spec.is_numeric:
                missing = parse_number(value) is None
            else:
                missing = not str(value or '').strip()
            if missing:
                errors.append(self._t('form.required', field=spec.label))

        errors.extend(self._custom_key_errors())
        if errors:
            raise FormValidationError(errors)

    def processed_details(self) -> Dict[str, Any]:
        """
        Details as they are stored: numeric fields of the current type
        coerced (None when unparseable), custom rows merged under
        slugified keys, rows with an empty key dropped.
        """
        clashes = self._custom_key_errors()
        if clashes:
            raise FormValidationError(clashes)

        details = dict(self.details)
        for name in NUMERIC_FIELDS[self.type]:
            details[name] = parse_number(details.get(name))

        for row in self.custom_details:
            key = slugify_detail_key(row.key)
            if key:
                details[key] = row.value
        return details

    def build_listing(self, image_urls: List[str], brochure_url: str) -> Listing:
        """Listing record for the final image list and brochure URL"""
        details = self.processed_details()
        details['brochure_url'] = brochure_url
        return Listing(
            id=self.id,
            type=self.type,
            location=self.location,
            price=parse_number(self.price),
            image_urls=list(image_urls),
            map_embed=self.map_embed,
            details=details_class_for(self.type).from_dict(details),
        )

    def english_translation(self, listing_id: int) -> Translation:
        return Translation(parent_id=listing_id, title=self.en_title, description=self.en_description)

    def telugu_translation(self, listing_id: int) -> Translation:
        return Translation(parent_id=listing_id, title=self.te_title, description=self.te_description)

    def mark_saved(self, listing: Listing):
        """Adopt the saved record as the new baseline for the next save"""
        self.id = listing.id
        self.image_urls = list(listing.image_urls)
        self.original_image_urls = list(listing.image_urls)
        self.new_images = []
        self.new_brochure = None
        self.details['brochure_url'] = listing.details.brochure_url
        self.original_brochure_url = listing.details.brochure_url
        self.has_te_translation = self.telugu_translation(listing.id).has_title

    def to_dict(self) -> Dict[str, Any]:
        """Current form state (for display)"""
        details = dict(self.details)
        details['amenities'] = [a.to_dict() for a in self.selected_amenities]
        return {
            'id': self.id,
            'type': self.type.value,
            'location': self.location,
            'price': self.price,
            'map_embed': self.map_embed,
            'image_urls': list(self.image_urls),
            'brochure_name': file_name_from_url(details.get('brochure_url') or ''),
            'details': details,
            'custom_details': [{'key': row.key, 'value': row.value} for row in self.custom_details],
            'custom_amenities': [a.name for a in self.custom_amenities],
            'en_title': self.en_title,
            'en_description': self.en_description,
            'te_title': self.te_title,
            'te_description': self.te_description,
            'warnings': list(self.warnings),
        }

    # ==================== LOAD ====================

    @classmethod
    def from_listing(
        cls,
        listing: Listing,
        en: Optional[Translation] = None,
        te: Optional[Translation] = None,
        lang: Optional[str] = None,
    ) -> 'ListingForm':
        """Edit form for a stored listing and its translations"""
        form = cls(listing.type, lang=lang)
        form.id = listing.id
        form.location = listing.location or ''
        form.price = '' if listing.price is None else str(listing.price)
        form.image_urls = list(listing.image_urls)
        form.original_image_urls = list(listing.image_urls)
        form.map_embed = listing.map_embed or ''

        stored = listing.details
        details: Dict[str, Any] = {}
        for spec in form.fields():
            value = getattr(stored, spec.name, spec.empty_value())
            if value is None:
                value = spec.empty_value()
            details[spec.name] = value
        details['amenities'] = list(stored.amenities)
        form.details = details

        predefined = set(predefined_amenity_names(listing.type))
        form.custom_amenities = [
            Amenity(name=a.name, icon=a.icon) for a in stored.amenities if a.name not in predefined
        ]
        form.custom_details = [CustomDetail(key=k, value=v) for k, v in stored.custom.items()]
        form.original_brochure_url = stored.brochure_url or ''

        if en is not None:
            form.en_title = en.title or ''
            form.en_description = en.description or ''
        if te is not None:
            form.te_title = te.title or ''
            form.te_description = te.description or ''
            form.has_te_translation = True
        return form

    def apply(self, data: Dict[str, Any], base_dir: Optional[Path] = None):
        """
        Apply a form document (e.g. from a JSON file).

        Keys mirror the form: ``type`` (applied first), the text fields,
        ``details`` {name: value}, ``amenities`` [names] and
        ``custom_details`` [{key, value}] (each replaces the current list),
        ``images`` [paths], ``remove_images`` [urls], ``brochure``
        (path, or empty to remove it).
        """
        if 'type' in data and PropertyType(data['type']) != self.type:
            self.set_type(data['type'])

        for name in self.TEXT_FIELDS:
            if name in data:
                self.set_field(name, data[name])

        for name, value in (data.get('details') or {}).items():
            self.set_detail(name, value)

        if 'custom_details' in data:
            self.custom_details = []
            for row in data['custom_details'] or []:
                detail = self.add_custom_detail()
                detail.key = str(row.get('key', ''))
                detail.value = '' if row.get('value') is None else str(row.get('value'))

        if 'amenities' in data:
            self.details['amenities'] = []
            self.select_amenities(data['amenities'] or [])

        for url in data.get('remove_images') or []:
            if url in self.image_urls:
                self.remove_existing_image(self.image_urls.index(url))

        self.attach_images([load_upload(path, base_dir) for path in data.get('images') or []])

        if 'brochure' in data:
            if data['brochure']:
                self.attach_brochure(load_upload(data['brochure'], base_dir))
            else:
                self.remove_brochure()
