from flask import Blueprint, jsonify, request

from routes.decorators import current_identity, token_required, validate_json
from schemas import ChangePasswordRequest, UpdateProfileRequest
from services import avatar_service, user_service

users_bp = Blueprint('users', __name__)


@users_bp.route('/me', methods=['GET'])
@token_required
def get_profile():
    user = user_service.get_user(current_identity().user_id)
    return jsonify({'success': True, 'data': user.to_dict()})


@users_bp.route('/me', methods=['PUT'])
@token_required
@validate_json(UpdateProfileRequest)
def update_profile(payload):
    user = user_service.update_profile(
        current_identity().user_id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        age=payload.age,
        email=payload.email,
    )
    return jsonify({
        'success': True,
        'message': 'Perfil actualizado exitosamente',
        'data': user.to_dict()
    })


@users_bp.route('/me/password', methods=['PUT'])
@token_required
@validate_json(ChangePasswordRequest)
def change_password(payload):
    user_service.change_password(current_identity().user_id, payload.current_password, payload.new_password)
    return jsonify({'success': True, 'message': 'Contraseña actualizada exitosamente'})


@users_bp.route('/me/avatar', methods=['POST'])
@token_required
def upload_avatar():
    user = avatar_service.save_avatar(current_identity().user_id, request.files.get('avatar'))
    return jsonify({
        'success': True,
        'message': 'Avatar actualizado exitosamente',
        'data': {'avatar': user.avatar}
    })


@users_bp.route('/me', methods=['DELETE'])
@token_required
def delete_account():
    user_service.delete_user(current_identity().user_id)
    return jsonify({'success': True, 'message': 'Cuenta eliminada exitosamente'})
