"""
Session credentials and request header construction.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class Credentials:
    """
    Tokens captured during authentication.

    Both stay None in test mode. The access token is set once by login and the
    CSRF token only if the server hands one out.
    """

    access_token: Optional[str] = None
    csrf_token: Optional[str] = None


def build_headers(credentials: Credentials, test_mode: bool, need_csrf: bool = False) -> Dict[str, str]:
    """
    Build request headers for a performance-test call.

    Args:
        credentials: Tokens captured during authentication
        test_mode: When True no auth headers are added at all
        need_csrf: Whether the request changes server state and needs X-CSRF-TOKEN

    Returns:
        Header dict for requests
    """
    headers = {'Content-Type': 'application/json'}

    if test_mode:
        return headers

    if credentials.access_token:
        headers['Authorization'] = f'Bearer {credentials.access_token}'

    # A missing CSRF token is tolerated; the server decides whether to reject
    if need_csrf and credentials.csrf_token:
        headers['X-CSRF-TOKEN'] = credentials.csrf_token

    return headers
