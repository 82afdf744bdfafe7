import io

import pytest
from PIL import Image

from estate_admin.images import ImageProcessor, InvalidImageError
from estate_admin.models import UploadFile


def test_small_image_is_kept(image_file):
    upload = image_file('a.png', 100, 50)
    prepared = ImageProcessor(max_width=200).prepare(upload)
    assert prepared.content == upload.content
    assert prepared.content_type == 'image/png'


def test_wide_image_is_scaled_down(image_file):
    prepared = ImageProcessor(max_width=100).prepare(image_file('wide.jpg', 400, 200, 'JPEG'))

    img = Image.open(io.BytesIO(prepared.content))
    assert img.size == (100, 50)
    assert img.format == 'JPEG'
    assert prepared.content_type == 'image/jpeg'
    assert prepared.name == 'wide.jpg'


def test_zero_width_disables_resizing(image_file):
    upload = image_file('a.png', 400, 200)
    prepared = ImageProcessor(max_width=0).prepare(upload)
    assert prepared.content == upload.content


def test_non_image_is_rejected():
    with pytest.raises(InvalidImageError) as exc:
        ImageProcessor().prepare(UploadFile('notes.txt', b'hello'))
    assert exc.value.name == 'notes.txt'


def test_unsupported_format_is_rejected(image_file):
    with pytest.raises(InvalidImageError):
        ImageProcessor().inspect(image_file('anim.gif', 10, 10, 'GIF'))
