"""
Snapshot tests for API responses to detect unintended changes in their shape.
"""
import json
from pathlib import Path

import pytest

SNAPSHOT_DIR = Path(__file__).parent / 'snapshots'


def _dump(data):
    return json.dumps(data, indent=4, sort_keys=True)


class TestSnapshots:
    """A collection of snapshot tests for the JSON API."""

    @pytest.fixture(autouse=True)
    def snapshot_dir(self, snapshot):
        snapshot.snapshot_dir = SNAPSHOT_DIR
        return snapshot

    def test_signup_response_snapshot(self, client, snapshot):
        """Snapshot test for the /auth/signup JSON response."""
        response = client.post('/auth/signup', json={
            'firstName': 'Snap', 'lastName': 'Shot', 'age': 30,
            'email': 'snap@example.com', 'password': 'secret1'
        })

        assert response.status_code == 201
        json_data = response.get_json()
        # Replace generated values before snapshotting
        json_data['token'] = '<token>'
        json_data['userId'] = '<id>'
        json_data['user']['id'] = '<id>'

        snapshot.assert_match(_dump(json_data), 'signup_response.json')

    def test_task_created_snapshot(self, client, auth_headers, snapshot):
        """Snapshot test for the POST /tasks JSON response."""
        response = client.post('/tasks', headers=auth_headers, json={
            'title': 'Buy milk', 'detail': 'Two bottles', 'date': '2024-01-01',
            'time': '14:30', 'status': 'Haciendo'
        })

        assert response.status_code == 201
        json_data = response.get_json()
        task = json_data['task']
        task['id'] = task['userId'] = '<id>'
        task['createdAt'] = task['updatedAt'] = '<timestamp>'

        snapshot.assert_match(_dump(json_data), 'task_created_response.json')

    def test_login_failure_snapshot(self, client, snapshot):
        response = client.post('/auth/login', json={'email': 'ghost@example.com', 'password': 'whatever'})

        assert response.status_code == 401
        snapshot.assert_match(_dump(response.get_json()), 'login_failure_response.json')
