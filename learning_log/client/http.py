import logging

import requests

from .errors import (MalformedResponseError, NetworkError, NotFoundError, RequestTimeoutError, UnauthorizedError,
                     ValidationError)


logger = logging.getLogger(__name__)


def error_message(response, default):
    """Pull the human-readable message out of an API error body."""
    try:
        body = response.json()
    except ValueError:
        return default
    if not isinstance(body, dict):
        return default
    return body.get('description') or body.get('message') or default


class ApiClient:
    """
    Thin wrapper around a `requests` session for the Learning Log API.

    Every request is bounded by `timeout` seconds and carries the session's
    bearer token when there is one. Failures are translated into the client's
    error types:

        * timeout -> RequestTimeoutError
        * connection failure or 5xx -> NetworkError
        * 400 -> ValidationError (server message kept verbatim)
        * 401 -> UnauthorizedError
        * 404 -> NotFoundError
    """

    def __init__(self, base_url, timeout=5.0, session=None, http=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session
        self.http = http or requests.Session()

    def _headers(self):
        headers = {'Accept': 'application/json'}
        token = self.session.token if self.session is not None else None
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def request(self, method, path, payload=None):
        url = f'{self.base_url}{path}'
        logger.debug('%s %s', method, url)
        try:
            response = self.http.request(method, url, json=payload, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(f'The server did not respond within {self.timeout:g} seconds.') from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f'Unable to connect to the server at {self.base_url}.') from e

        status = response.status_code
        if status == 400:
            raise ValidationError(error_message(response, 'The server rejected the request.'))
        if status == 401:
            raise UnauthorizedError(error_message(response, 'Your session has expired. Please log in again.'))
        if status == 404:
            raise NotFoundError(error_message(response, 'Log not found'))
        if not 200 <= status < 300:
            raise NetworkError(error_message(response, f'The server answered with status {status}.'))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError('The server sent a response that is not JSON.') from e
