from flask import Blueprint, jsonify

from routes.decorators import current_identity, token_required, validate_json
from schemas import TaskCreateRequest, TaskUpdateRequest
from services import task_service

tasks_bp = Blueprint('tasks', __name__)


@tasks_bp.route('', methods=['POST'])
@token_required
@validate_json(TaskCreateRequest)
def create_task(payload):
    task = task_service.create_task(
        current_identity().user_id,
        title=payload.title,
        detail=payload.detail,
        date=payload.date,
        time=payload.time,
        status=payload.status,
    )
    return jsonify({'success': True, 'message': 'Task created successfully', 'task': task.to_dict()}), 201


@tasks_bp.route('', methods=['GET'])
@token_required
def list_tasks():
    tasks = task_service.list_tasks(current_identity().user_id)
    return jsonify({
        'success': True,
        'message': 'Tasks retrieved successfully',
        'tasks': [task.to_dict() for task in tasks]
    })


@tasks_bp.route('/<task_id>', methods=['GET'])
@token_required
def get_task(task_id):
    task = task_service.get_task(current_identity().user_id, task_id)
    return jsonify({'success': True, 'message': 'Task retrieved successfully', 'task': task.to_dict()})


@tasks_bp.route('/<task_id>', methods=['PUT'])
@token_required
@validate_json(TaskUpdateRequest)
def update_task(task_id, payload):
    task = task_service.update_task(current_identity().user_id, task_id, payload.changes())
    return jsonify({'success': True, 'message': 'Task updated successfully', 'task': task.to_dict()})


@tasks_bp.route('/<task_id>', methods=['DELETE'])
@token_required
def delete_task(task_id):
    task_service.delete_task(current_identity().user_id, task_id)
    return jsonify({'success': True, 'message': 'Task deleted successfully'})
