"""Google sign-in (OAuth 2.0 authorization code flow).

Only the pieces the backend needs: build the consent URL, exchange the code
and read the basic profile. Local account resolution lives in user_service.
"""
import secrets
from urllib.parse import urlencode

import requests
from flask import current_app

AUTHORIZE_URL = 'https://accounts.google.com/o/oauth2/v2/auth'
TOKEN_URL = 'https://oauth2.googleapis.com/token'
USERINFO_URL = 'https://openidconnect.googleapis.com/v1/userinfo'
SCOPES = 'openid email profile'


class GoogleAuthError(Exception):
    """Google sign-in could not be completed."""


def is_configured():
    return bool(current_app.config.get('GOOGLE_CLIENT_ID') and current_app.config.get('GOOGLE_CLIENT_SECRET'))


def new_state():
    return secrets.token_urlsafe(24)


def authorization_url(redirect_uri, state):
    params = {
        'client_id': current_app.config['GOOGLE_CLIENT_ID'],
        'redirect_uri': redirect_uri,
        'response_type': 'code',
        'scope': SCOPES,
        'state': state,
        'prompt': 'select_account',
    }
    return f'{AUTHORIZE_URL}?{urlencode(params)}'


def fetch_profile(code, redirect_uri):
    """
    Exchange an authorization code for the user's Google profile.

    Returns:
        dict with google_id, email, first_name, last_name

    Raises:
        GoogleAuthError: If Google rejects the code or the profile lacks an email
    """
    timeout = current_app.config['GOOGLE_HTTP_TIMEOUT']
    try:
        token_response = requests.post(TOKEN_URL, data={
            'code': code,
            'client_id': current_app.config['GOOGLE_CLIENT_ID'],
            'client_secret': current_app.config['GOOGLE_CLIENT_SECRET'],
            'redirect_uri': redirect_uri,
            'grant_type': 'authorization_code',
        }, timeout=timeout)
        token_response.raise_for_status()
        access_token = token_response.json().get('access_token')
        if not access_token:
            raise GoogleAuthError('Google did not return an access token')

        userinfo_response = requests.get(
            USERINFO_URL,
            headers={'Authorization': f'Bearer {access_token}'},
            timeout=timeout
        )
        userinfo_response.raise_for_status()
        userinfo = userinfo_response.json()
    except requests.RequestException as e:
        raise GoogleAuthError(f'Google request failed: {e}') from e

    if not userinfo.get('sub') or not userinfo.get('email'):
        raise GoogleAuthError('Google profile is missing an id or email')

    return {
        'google_id': userinfo['sub'],
        'email': userinfo['email'],
        'first_name': userinfo.get('given_name'),
        'last_name': userinfo.get('family_name'),
    }
