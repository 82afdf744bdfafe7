import json
from pathlib import Path

from estate_admin.i18n import translate, normalize_language, language_name


I18N_DIR = Path(__file__).resolve().parents[1] / 'estate_admin' / 'i18n'


def flatten(node, prefix=''):
    keys = set()
    for key, value in node.items():
        full = f'{prefix}.{key}' if prefix else key
        if isinstance(value, dict):
            keys |= flatten(value, full)
        else:
            keys.add(full)
    return keys


def test_dictionaries_have_the_same_keys():
    en = json.loads((I18N_DIR / 'en.json').read_text(encoding='utf-8'))
    te = json.loads((I18N_DIR / 'te.json').read_text(encoding='utf-8'))
    assert flatten(en) == flatten(te)


def test_normalize_language():
    assert normalize_language('TE') == 'te'
    assert normalize_language('te-IN') == 'te'
    assert normalize_language('en_GB') == 'en'
    assert normalize_language('fr') == 'en'
    assert normalize_language(None) == 'en'


def test_translate_with_variables():
    assert translate('upload.failed', 'en', name='a.png', error='boom') == 'Error uploading a.png: boom'


def test_unknown_key_falls_back():
    assert translate('missing.key', 'te') == 'missing.key'
    assert translate('missing.key', 'te', default='Fallback') == 'Fallback'


def test_language_names():
    assert language_name('te', 'en') == 'Telugu'
    assert language_name('en', 'en') == 'English'
