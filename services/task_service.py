"""Task Service.
Every query is scoped to the owner: a task that exists but belongs to someone
else is reported exactly like one that does not exist.
"""
from flask import current_app

from errors import NotFound
from extensions import db
from models import Task, TaskStatus

TASK_NOT_FOUND = 'Task not found'


def _owned(user_id, task_id):
    return Task.query.filter_by(id=task_id, user_id=user_id)


def create_task(user_id, title, date, detail=None, time=None, status=TaskStatus.TODO) -> Task:
    task = Task(
        user_id=user_id,
        title=title.strip(),
        detail=detail.strip() if detail else None,
        date=date,
        time=time,
        status=status or TaskStatus.TODO,
    )
    try:
        db.session.add(task)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating task for user {user_id}: {e}')
        raise
    return task


def list_tasks(user_id):
    return Task.query.filter_by(user_id=user_id) \
        .order_by(Task.date.asc(), Task.time.asc(), Task.created_at.asc()).all()


def get_task(user_id, task_id) -> Task:
    task = _owned(user_id, task_id).first()
    if not task:
        raise NotFound(TASK_NOT_FOUND)
    return task


def update_task(user_id, task_id, changes) -> Task:
    """Apply a partial update. `changes` holds only the fields to set."""
    task = get_task(user_id, task_id)
    try:
        for field in ('title', 'detail', 'date', 'time', 'status'):
            if field not in changes:
                continue
            value = changes[field]
            if field == 'title':
                value = value.strip()
            elif field == 'detail' and value is not None:
                value = value.strip() or None
            setattr(task, field, value)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error updating task {task_id}: {e}')
        raise
    return task


def delete_task(user_id, task_id):
    task = get_task(user_id, task_id)
    try:
        db.session.delete(task)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting task {task_id}: {e}')
        raise
