"""Avatar Service.
Stores profile pictures on local disk and serves them under /uploads/avatars.

Replacing an avatar writes the new file, commits the new reference and only
then deletes the old file. A failure after the commit leaves the old file
orphaned on disk, but the stored reference always points at a real file.
"""
import os
import time

from flask import current_app

from errors import NotFound, ValidationError
from extensions import db
from models import User

AVATAR_SUBDIR = 'avatars'
AVATAR_URL_PREFIX = '/uploads/avatars/'

MIME_EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/jpg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}


def avatar_dir():
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], AVATAR_SUBDIR)
    os.makedirs(path, exist_ok=True)
    return path


def _file_size(file_storage):
    file_storage.stream.seek(0, os.SEEK_END)
    size = file_storage.stream.tell()
    file_storage.stream.seek(0)
    return size


def _validate(file_storage):
    if file_storage is None or not file_storage.filename:
        raise ValidationError('No se ha seleccionado ningún archivo')
    if file_storage.mimetype not in current_app.config['AVATAR_MIME_TYPES']:
        raise ValidationError(
            'Formato de archivo no válido. Solo se permiten imágenes JPEG, PNG, GIF y WebP.')
    if _file_size(file_storage) > current_app.config['AVATAR_MAX_BYTES']:
        raise ValidationError('El archivo supera el tamaño máximo de 5MB')


def _filename_for(user_id, file_storage):
    # Extension comes from the validated MIME type, not the client filename
    ext = MIME_EXTENSIONS[file_storage.mimetype]
    return f'{user_id}-{int(time.time() * 1000)}{ext}'


def remove_avatar_file(avatar_url):
    """Delete the file behind an avatar URL, if it is still on disk."""
    if not avatar_url:
        return
    path = os.path.join(avatar_dir(), os.path.basename(avatar_url))
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError as e:
        current_app.logger.warning(f'Could not remove avatar file {path}: {e}')


def save_avatar(user_id, file_storage) -> User:
    """Store an uploaded image as the user's avatar."""
    _validate(file_storage)

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('Usuario no encontrado')

    filename = _filename_for(user_id, file_storage)
    path = os.path.join(avatar_dir(), filename)
    file_storage.save(path)

    old_avatar = user.avatar
    try:
        user.avatar = AVATAR_URL_PREFIX + filename
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error saving avatar for user {user_id}: {e}')
        if os.path.exists(path):
            os.remove(path)
        raise

    remove_avatar_file(old_avatar)
    current_app.logger.info(f'Avatar updated for user {user_id}')
    return user
