import io
import os

import pytest
from fastapi import UploadFile

from ecotrack.services import uploads


@pytest.mark.parametrize('filename', ['me.png', 'ME.JPG', 'photo.jpeg', 'anim.gif'])
def test_is_allowed_image_accepts_image_extensions(filename: str) -> None:
    assert uploads.is_allowed_image(filename)


@pytest.mark.parametrize('filename', ['notes.txt', 'archive.png.zip', 'png', '', None])
def test_is_allowed_image_rejects_other_files(filename) -> None:
    assert not uploads.is_allowed_image(filename)


def test_save_avatar_writes_file_and_returns_public_path(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(uploads.time, 'time', lambda: 1700000000.5)
    upload = UploadFile(file=io.BytesIO(b'fake-image'), filename='my avatar.png')

    path = uploads.save_avatar(upload, str(tmp_path))

    assert path == '/uploads/1700000000500-my_avatar.png'
    with open(os.path.join(tmp_path, '1700000000500-my_avatar.png'), 'rb') as stored:
        assert stored.read() == b'fake-image'


def test_save_avatar_rejects_non_image(tmp_path) -> None:
    upload = UploadFile(file=io.BytesIO(b'text'), filename='readme.txt')

    with pytest.raises(uploads.InvalidAvatarError):
        uploads.save_avatar(upload, str(tmp_path))

    assert os.listdir(tmp_path) == []


def test_remove_avatar_deletes_stored_file(tmp_path) -> None:
    stored = tmp_path / '1-me.png'
    stored.write_bytes(b'x')

    uploads.remove_avatar('/uploads/1-me.png', str(tmp_path))

    assert not stored.exists()
