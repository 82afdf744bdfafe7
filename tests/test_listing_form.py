import pytest

from estate_admin.forms import (
    ListingForm,
    FormError,
    FormValidationError,
    AmenityConflictError,
    empty_details,
)
from estate_admin.models import (
    PropertyType,
    Amenity,
    Listing,
    PlotDetails,
    Translation,
    field_specs,
)


def filled_plot_form(**details):
    form = ListingForm(PropertyType.PLOT)
    form.location = 'Kokapet, Hyderabad'
    form.price = '4500000'
    form.en_title = 'Corner plot'
    form.set_detail('area_sq_yards', details.pop('area_sq_yards', '200'))
    for name, value in details.items():
        form.set_detail(name, value)
    return form


class TestTypeSwitch:

    @pytest.mark.parametrize('new_type', list(PropertyType))
    def test_switching_type_resets_details(self, new_type):
        form = filled_plot_form(plot_number='A-12')
        form.add_custom_amenity('Temple Nearby')
        form.add_custom_detail().key = 'facing'

        form.set_type(new_type)

        assert form.type == new_type
        assert form.details == empty_details(new_type)
        assert form.details['amenities'] == []
        assert form.custom_details == []
        assert form.custom_amenities == []

    def test_empty_details_use_field_defaults(self):
        details = empty_details(PropertyType.FLAT)
        assert details['furnishing'] == 'None'
        assert details['car_parking'] is False
        assert details['bhk'] == ''
        assert details['brochure_url'] == ''

    def test_fields_follow_type(self):
        form = ListingForm(PropertyType.COMMERCIAL)
        assert [spec.name for spec in form.fields()] == [spec.name for spec in field_specs(PropertyType.COMMERCIAL)]
        assert form.fields()[0].name == 'sq_ft'

    def test_set_field_type_switches(self):
        form = filled_plot_form()
        form.set_field('type', 'villa')
        assert form.type == PropertyType.VILLA
        assert 'area_sq_yards' not in form.details


class TestDetails:

    def test_unknown_detail_is_rejected(self):
        form = ListingForm(PropertyType.PLOT)
        with pytest.raises(FormError):
            form.set_detail('bhk', '3')

    def test_invalid_choice_is_rejected(self):
        form = ListingForm(PropertyType.FLAT)
        with pytest.raises(FormError):
            form.set_detail('furnishing', 'Luxury')
        form.set_detail('furnishing', 'Semi')
        assert form.details['furnishing'] == 'Semi'

    def test_bool_details(self):
        form = ListingForm(PropertyType.PLOT)
        form.set_detail('gated_community', 1)
        assert form.details['gated_community'] is True
        form.set_detail('gated_community', 'false')
        assert form.details['gated_community'] is False
        form.set_detail('gated_community', 'Yes')
        assert form.details['gated_community'] is True
        form.set_detail('gated_community', '0')
        assert form.details['gated_community'] is False

    def test_unreadable_bool_is_rejected(self):
        form = ListingForm(PropertyType.PLOT)
        with pytest.raises(FormError) as exc:
            form.set_detail('gated_community', 'maybe')
        assert exc.value.message == "'maybe' is not a valid choice for Gated Community."
        assert form.details['gated_community'] is False

    def test_map_embed_iframe_is_reduced_to_src(self):
        form = ListingForm()
        form.set_field('map_embed', '<iframe src="https://maps.example.com/embed?pb=1" width="600"></iframe>')
        assert form.map_embed == 'https://maps.example.com/embed?pb=1'


class TestAmenities:

    def test_toggle_adds_and_removes(self):
        form = ListingForm(PropertyType.FLAT)
        pool = Amenity('Swimming Pool', 'pool')
        form.toggle_amenity(pool)
        assert form.selected_amenity_names() == ['Swimming Pool']
        form.toggle_amenity(pool)
        assert form.selected_amenity_names() == []

    def test_custom_amenity_is_selected_with_default_icon(self):
        form = ListingForm(PropertyType.PLOT)
        amenity = form.add_custom_amenity('  Temple Nearby ')
        assert amenity == Amenity('Temple Nearby', 'star')
        assert form.is_amenity_selected('Temple Nearby')
        assert form.custom_amenities == [amenity]

    def test_blank_custom_amenity_is_ignored(self):
        form = ListingForm()
        assert form.add_custom_amenity('   ') is None
        assert form.custom_amenities == []

    def test_predefined_name_conflicts_case_insensitively(self):
        form = ListingForm(PropertyType.FLAT)
        with pytest.raises(AmenityConflictError) as exc:
            form.add_custom_amenity('swimming pool')
        assert "already a predefined amenity" in exc.value.message
        assert form.custom_amenities == []

    def test_duplicate_custom_name_conflicts(self):
        form = ListingForm(PropertyType.PLOT)
        form.add_custom_amenity('Temple Nearby')
        with pytest.raises(AmenityConflictError):
            form.add_custom_amenity('TEMPLE NEARBY')

    def test_conflict_message_is_localized(self):
        form = ListingForm(PropertyType.FLAT, lang='te')
        with pytest.raises(AmenityConflictError) as exc:
            form.add_custom_amenity('Gymnasium')
        assert "already a predefined amenity" not in exc.value.message

    def test_agricultural_has_no_predefined_amenities(self):
        form = ListingForm(PropertyType.AGRICULTURAL)
        assert form.available_amenities() == {}
        form.add_custom_amenity('Borewell Pump')
        assert form.selected_amenity_names() == ['Borewell Pump']

    def test_select_amenities_by_name(self):
        form = ListingForm(PropertyType.FLAT)
        form.select_amenities(['gymnasium', 'Temple Nearby', 'Gymnasium'])
        assert form.selected_amenity_names() == ['Gymnasium', 'Temple Nearby']
        assert [a.name for a in form.custom_amenities] == ['Temple Nearby']


class TestCustomDetails:

    def test_keys_are_slugified_and_empty_keys_dropped(self):
        form = filled_plot_form()
        row = form.add_custom_detail()
        form.update_custom_detail(0, 'key', ' Facing Direction ')
        form.update_custom_detail(0, 'value', 'East')
        form.add_custom_detail()
        form.update_custom_detail(1, 'value', 'orphan value')

        details = form.processed_details()
        assert row.key == ' Facing Direction '
        assert details['facing_direction'] == 'East'
        assert 'orphan value' not in details.values()

    def test_remove_custom_detail(self):
        form = ListingForm()
        form.add_custom_detail().key = 'a'
        form.add_custom_detail().key = 'b'
        form.remove_custom_detail(0)
        assert [row.key for row in form.custom_details] == ['b']

    def test_update_rejects_other_fields(self):
        form = ListingForm()
        form.add_custom_detail()
        with pytest.raises(FormError):
            form.update_custom_detail(0, 'label', 'x')

    def test_clash_with_standard_field_fails_validation(self):
        form = filled_plot_form()
        form.add_custom_detail()
        form.update_custom_detail(0, 'key', 'Survey No')
        form.update_custom_detail(0, 'value', '99')

        with pytest.raises(FormValidationError) as exc:
            form.validate()
        assert any('survey_no' in error for error in exc.value.errors)
        with pytest.raises(FormValidationError):
            form.processed_details()


class TestSubmit:

    def test_numeric_fields_are_coerced(self):
        form = ListingForm(PropertyType.FLAT)
        form.set_detail('bhk', '3')
        form.set_detail('floor', '')
        form.set_detail('total_floors', '150abc')
        form.set_detail('sq_ft', '1450.5')

        details = form.processed_details()
        assert details['bhk'] == 3
        assert details['floor'] is None
        assert details['total_floors'] is None
        assert details['sq_ft'] == 1450.5

    def test_validate_lists_every_problem(self):
        form = ListingForm(PropertyType.FLAT)
        form.price = 'a lot'
        with pytest.raises(FormValidationError) as exc:
            form.validate()
        errors = exc.value.errors
        assert 'Location is required.' in errors
        assert 'Price must be a number.' in errors
        assert 'Title (English) is required.' in errors
        assert 'BHK is required.' in errors
        assert 'Area (Sq. Ft) is required.' in errors

    def test_valid_form_passes(self):
        filled_plot_form().validate()

    def test_build_listing(self):
        form = filled_plot_form(road_facing='East')
        form.select_amenities(['Water Supply'])
        listing = form.build_listing(['https://cdn/x.png'], 'https://cdn/b.pdf')

        assert listing.type == PropertyType.PLOT
        assert listing.price == 4500000
        assert isinstance(listing.details, PlotDetails)
        assert listing.details.area_sq_yards == 200
        assert listing.details.brochure_url == 'https://cdn/b.pdf'
        assert listing.details.amenities == [Amenity('Water Supply', 'water_drop')]
        record = listing.to_record()
        assert record['details']['road_facing'] == 'East'
        assert record['image_urls'] == ['https://cdn/x.png']


class TestLoad:

    def test_from_listing_splits_custom_amenities_and_details(self):
        listing = Listing.from_record({
            'id': 7,
            'type': 'flat',
            'location': 'Gachibowli',
            'price': 9500000,
            'image_urls': ['https://cdn/a.png'],
            'details': {
                'bhk': 3, 'floor': 4, 'total_floors': 10, 'sq_ft': 1600,
                'furnishing': 'Full', 'car_parking': True,
                'brochure_url': 'https://cdn/b.pdf',
                'amenities': [{'name': 'Lift', 'icon': 'elevator'}, {'name': 'Temple Nearby', 'icon': 'star'}],
                'facing': 'East',
            },
        })
        form = ListingForm.from_listing(
            listing,
            en=Translation(parent_id=7, title='Sky Homes', description='3BHK'),
            te=Translation(parent_id=7, title='స్కై హోమ్స్'),
        )

        assert form.is_edit_mode
        assert form.price == '9500000'
        assert form.details['bhk'] == 3
        assert form.selected_amenity_names() == ['Lift', 'Temple Nearby']
        assert [a.name for a in form.custom_amenities] == ['Temple Nearby']
        assert [(row.key, row.value) for row in form.custom_details] == [('facing', 'East')]
        assert form.original_image_urls == ['https://cdn/a.png']
        assert form.original_brochure_url == 'https://cdn/b.pdf'
        assert form.en_title == 'Sky Homes'
        assert form.has_te_translation

    def test_apply_document(self, tmp_path):
        (tmp_path / 'front.png').write_bytes(b'not really a png')
        form = ListingForm()
        form.apply({
            'type': 'villa',
            'location': 'Shamshabad',
            'price': 25000000,
            'en_title': 'Garden villa',
            'details': {'bhk': 4, 'sq_ft': 3200, 'private_pool': True},
            'amenities': ['Swimming Pool'],
            'custom_details': [{'key': 'Facing', 'value': 'North'}],
            'images': ['front.png'],
        }, base_dir=tmp_path)

        assert form.type == PropertyType.VILLA
        assert form.price == '25000000'
        assert form.details['bhk'] == '4'
        assert form.details['private_pool'] is True
        assert form.selected_amenity_names() == ['Swimming Pool']
        assert form.custom_details[0].value == 'North'
        assert [f.name for f in form.new_images] == ['front.png']

    def test_apply_replaces_selected_amenities(self):
        form = ListingForm(PropertyType.PLOT)
        form.select_amenities(['Water Supply', 'Jogging Track', 'Temple Nearby'])

        form.apply({'amenities': ['Water Supply', 'temple nearby']})

        assert form.selected_amenity_names() == ['Water Supply', 'Temple Nearby']
        assert [a.name for a in form.custom_amenities] == ['Temple Nearby']

        form.apply({'amenities': []})
        assert form.selected_amenity_names() == []

    def test_apply_without_amenities_keeps_selection(self):
        form = ListingForm(PropertyType.PLOT)
        form.select_amenities(['Water Supply'])
        form.apply({'location': 'Kokapet'})
        assert form.selected_amenity_names() == ['Water Supply']

    def test_apply_reads_bool_text(self):
        form = ListingForm(PropertyType.PLOT)
        form.set_detail('gated_community', True)
        form.apply({'details': {'gated_community': 'false'}})
        assert form.details['gated_community'] is False

    def test_to_dict_shows_brochure_file_name(self):
        form = ListingForm(PropertyType.PLOT)
        form.details['brochure_url'] = (
            'https://demo.supabase.co/storage/v1/object/public/listing-documents/public/1700000000000-layout.pdf'
        )
        assert form.to_dict()['brochure_name'] == 'layout.pdf'
        form.remove_brochure()
        assert form.to_dict()['brochure_name'] == ''
