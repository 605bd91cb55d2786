"""
Regression tests to ensure previously fixed bugs do not re-emerge.
"""
from models import ResetTicket


class TestRegressionSuite:
    """A collection of regression tests."""

    def test_profile_update_does_not_clear_avatar(self, client, auth_headers, test_user, db_session):
        """
        Regression Test: Ensures that updating a user's profile information
        does not reset their avatar.
        """
        # Step 1: Give the user an avatar
        test_user.avatar = '/uploads/avatars/existing.png'
        db_session.commit()

        # Step 2: Update the profile
        response = client.put('/users/me', headers=auth_headers, json={
            'firstName': 'Usuario', 'lastName': 'Prueba', 'age': 31, 'email': 'test@example.com'
        })
        assert response.status_code == 200

        # Step 3: Verify the avatar survived
        db_session.refresh(test_user)
        assert test_user.avatar == '/uploads/avatars/existing.png'
        assert test_user.age == 31

    def test_partial_task_update_keeps_other_fields(self, client, auth_headers, test_task, db_session):
        """
        Regression Test: A PUT with a single field must not null out the
        fields it does not mention.
        """
        client.put(f'/tasks/{test_task.id}', headers=auth_headers, json={'title': 'Buy oat milk'})

        db_session.refresh(test_task)
        assert test_task.title == 'Buy oat milk'
        assert test_task.detail == 'Semi-skimmed'
        assert test_task.time == '09:30'
        assert test_task.status == 'Por hacer'
        assert test_task.date.isoformat() == '2024-01-01'

    def test_password_change_clears_reset_ticket(self, client, auth_headers, test_user, db_session):
        """
        Regression Test: A reset link issued before a password change must
        stop working after it.
        """
        _, test_user.reset_ticket = ResetTicket.issue()
        db_session.commit()

        client.put('/users/me/password', headers=auth_headers, json={
            'currentPassword': 'password123', 'newPassword': 'changed1', 'confirmPassword': 'changed1'
        })

        db_session.refresh(test_user)
        assert test_user.reset_token_hash is None
        assert test_user.reset_expires_at is None

    def test_signup_email_is_case_insensitive(self, client, test_user):
        """
        Regression Test: Mixed-case emails must not create a second account.
        """
        response = client.post('/auth/signup', json={
            'firstName': 'Dup', 'lastName': 'User', 'email': 'Test@Example.COM', 'password': 'secret1'
        })
        assert response.status_code == 409

        login = client.post('/auth/login', json={'email': 'TEST@EXAMPLE.COM', 'password': 'password123'})
        assert login.status_code == 200

    def test_time_cleared_with_empty_string(self, client, auth_headers, test_task, db_session):
        """
        Regression Test: Front ends send "" for an emptied time input.
        """
        response = client.put(f'/tasks/{test_task.id}', headers=auth_headers, json={'time': ''})
        assert response.status_code == 200

        db_session.refresh(test_task)
        assert test_task.time is None

    def test_two_logins_return_distinct_tokens(self, client, test_user):
        """
        Regression Test: Tokens issued within the same second must differ.
        """
        credentials = {'email': 'test@example.com', 'password': 'password123'}
        first = client.post('/auth/login', json=credentials).get_json()['token']
        second = client.post('/auth/login', json=credentials).get_json()['token']
        assert first != second

    def test_passwords_longer_than_72_bytes(self, client, db_session, test_user):
        """
        Regression Test: bcrypt rejects inputs over 72 bytes; signup, reset
        and login must still work and must not ignore the tail.
        """
        long_password = 'ñ' * 50  # 100 bytes in UTF-8
        signup = client.post('/auth/signup', json={
            'firstName': 'Long', 'lastName': 'Password', 'email': 'long@example.com', 'password': long_password
        })
        assert signup.status_code == 201

        login = client.post('/auth/login', json={'email': 'long@example.com', 'password': long_password})
        assert login.status_code == 200
        truncated = client.post('/auth/login', json={'email': 'long@example.com', 'password': 'ñ' * 36})
        assert truncated.status_code == 401

        raw_token, test_user.reset_ticket = ResetTicket.issue()
        db_session.commit()
        reset = client.post('/auth/reset-password', json={'token': raw_token, 'password': 'x' * 80})
        assert reset.status_code == 200
        assert client.post('/auth/login', json={'email': 'test@example.com', 'password': 'x' * 80}).status_code == 200
