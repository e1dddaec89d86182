"""
Google Sign-In - ID token verification through Google's tokeninfo endpoint
"""

import requests
from flask import current_app

TOKENINFO_URL = 'https://oauth2.googleapis.com/tokeninfo'
VALID_ISSUERS = ('accounts.google.com', 'https://accounts.google.com')


class GoogleAuthError(Exception):
    """The Google ID token could not be verified"""


def verify_google_id_token(id_token):
    """
    Verify a Google ID token and return its claims

    Args:
        id_token (str): Credential received by the SPA from Google Sign-In

    Returns:
        dict: Token claims with at least ``sub`` and ``email``

    Raises:
        GoogleAuthError: If Google rejects the token or the claims do not match
    """
    client_id = current_app.config.get('GOOGLE_CLIENT_ID')
    if not client_id:
        raise GoogleAuthError('GOOGLE_CLIENT_ID is not configured')

    try:
        response = requests.get(TOKENINFO_URL, params={'id_token': id_token}, timeout=10)
    except requests.RequestException as e:
        raise GoogleAuthError(f'tokeninfo request failed: {e}') from e

    if response.status_code != 200:
        raise GoogleAuthError(f'tokeninfo rejected token ({response.status_code})')

    claims = response.json()
    if claims.get('aud') != client_id:
        raise GoogleAuthError('Token audience mismatch')
    if claims.get('iss') not in VALID_ISSUERS:
        raise GoogleAuthError('Token issuer mismatch')
    if not claims.get('sub') or not claims.get('email'):
        raise GoogleAuthError('Token is missing subject or email')
    if str(claims.get('email_verified', 'true')).lower() != 'true':
        raise GoogleAuthError('Google email is not verified')
    return claims
