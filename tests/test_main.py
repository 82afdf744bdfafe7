import json
from unittest import mock

import pytest

from estate_admin import main as cli


def run(monkeypatch, *argv):
    monkeypatch.setattr('sys.argv', ['estate-admin', *argv])
    cli.main()


@pytest.fixture
def connected(backend, monkeypatch):
    monkeypatch.setattr(cli.Config, 'validate', classmethod(lambda cls: True))
    monkeypatch.setattr(cli.BackendClient, 'from_config', classmethod(lambda cls: backend))
    return backend


def test_property_types_works_offline(monkeypatch, capsys):
    with mock.patch.object(cli.BackendClient, 'from_config') as from_config:
        run(monkeypatch, 'property-types')
        from_config.assert_not_called()

    types = json.loads(capsys.readouterr().out)
    assert [t['value'] for t in types] == ['plot', 'flat', 'villa', 'house', 'commercial', 'agricultural', 'others']
    plot_fields = {f['name']: f for f in types[0]['fields']}
    assert plot_fields['area_sq_yards']['required'] is True


def test_amenities(monkeypatch, capsys):
    run(monkeypatch, 'amenities', '--type', 'plot')
    catalog = json.loads(capsys.readouterr().out)
    assert catalog['facilities'] == [{'name': 'Water Supply', 'icon': 'water_drop'}]


def test_save_listing_from_file(connected, monkeypatch, capsys, tmp_path, image_file):
    (tmp_path / 'front.png').write_bytes(image_file().content)
    form_file = tmp_path / 'plot.json'
    form_file.write_text(json.dumps({
        'type': 'plot',
        'location': 'Kokapet',
        'price': '4500000',
        'en_title': 'Corner plot',
        'details': {'area_sq_yards': '200'},
        'amenities': ['Water Supply'],
        'images': ['front.png'],
    }), encoding='utf-8')

    run(monkeypatch, 'save-listing', '--file', str(form_file))

    out = capsys.readouterr().out
    assert out.startswith('✓ Listing saved successfully!')
    row = connected.tables['listings'][0]
    assert row['details']['area_sq_yards'] == 200
    assert len(row['image_urls']) == 1


def test_invalid_form_exits_with_error(connected, monkeypatch, capsys, tmp_path):
    form_file = tmp_path / 'flat.json'
    form_file.write_text(json.dumps({'type': 'flat', 'location': 'Kondapur'}), encoding='utf-8')

    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, 'save-listing', '--file', str(form_file))

    assert exc.value.code == 1
    assert 'BHK is required.' in capsys.readouterr().out
    assert connected.tables['listings'] == []


def test_get_missing_listing(connected, monkeypatch, capsys):
    with pytest.raises(SystemExit):
        run(monkeypatch, 'get-listing', '5')
    assert 'Error: Listing not found' in capsys.readouterr().out


def test_deploy(connected, monkeypatch, capsys):
    run(monkeypatch, '--lang', 'en', 'deploy')
    assert 'Deployment successfully triggered!' in capsys.readouterr().out
    assert len(connected.tables['Build']) == 1


def test_footer_show(connected, monkeypatch, capsys):
    connected.seed('footer_content', id=1, company_name='Sri Estates')
    run(monkeypatch, 'footer')
    assert json.loads(capsys.readouterr().out)['company_name'] == 'Sri Estates'


def test_delete_listing_without_prompt(connected, monkeypatch, capsys):
    connected.seed('listings', type='plot', location='x', price=1, details={})
    run(monkeypatch, 'delete-listing', '1', '--yes')
    assert connected.tables['listings'] == []
