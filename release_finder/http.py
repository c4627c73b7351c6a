"""
Thin layer over requests for the three GitHub request shapes we issue
"""
import logging
from typing import Dict, Iterator, List, Optional, Tuple

import requests

from .errors import HTTPStatusError, MalformedResponse, TransportError

logger = logging.getLogger(__name__)

API_URL = 'https://api.github.com'
RELEASES_PATH = '/repos/{author}/{repository}/releases'
JSON_MEDIA_TYPE = 'application/vnd.github.v3+json'
OCTET_STREAM = 'application/octet-stream'
DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 1024 * 64


def releases_url(author: str, repository: str, api_url: str = API_URL) -> str:
    return api_url.rstrip('/') + RELEASES_PATH.format(author=author, repository=repository)


def build_headers(client: str, token: Optional[str] = None,
                  accept: str = JSON_MEDIA_TYPE) -> Dict[str, str]:
    """
    Headers sent with every request

    Parameters:
        client: identity of the calling application, sent as User-Agent
        token: optional GitHub access token
        accept: media type to negotiate
    """
    headers = {
        'Accept': accept,
        'User-Agent': client,
    }
    if accept == OCTET_STREAM:
        # Content-Length must describe the bytes we count
        headers['Accept-Encoding'] = 'identity'
    if token is not None:
        headers['Authorization'] = f'token {token}'
    return headers


def _get(url: str, headers: Dict[str, str], timeout, stream: bool = False) -> requests.Response:
    logger.debug('GET %s (Accept: %s)', url, headers.get('Accept'))
    try:
        resp = requests.get(url, headers=headers, timeout=timeout, stream=stream)
    except requests.RequestException as e:
        raise TransportError(url, e) from e

    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        resp.close()
        raise HTTPStatusError(url, resp.status_code, str(e)) from e
    return resp


def get_json_array(url: str, headers: Dict[str, str], timeout=DEFAULT_TIMEOUT) -> List:
    """
    GET a URL that is expected to return a JSON array

    Raises MalformedResponse if the body is not valid JSON or is not an array
    """
    resp = _get(url, headers, timeout)
    try:
        body = resp.json()
    except ValueError as e:
        raise MalformedResponse(url, f'body is not valid JSON ({e})') from e

    if not isinstance(body, list):
        raise MalformedResponse(url, f'expected a JSON array, got {type(body).__name__}')
    return body


def get_bytes(url: str, headers: Dict[str, str], timeout=DEFAULT_TIMEOUT) -> bytes:
    resp = _get(url, headers, timeout)
    return resp.content


def stream_bytes(url: str, headers: Dict[str, str], timeout=DEFAULT_TIMEOUT,
                 chunk_size: int = CHUNK_SIZE) -> Tuple[Optional[int], Iterator[bytes]]:
    """
    Start a streaming GET

    Returns:
        (total, chunks) where total is the Content-Length (None if the server
        did not send one) and chunks yields the body in arrival order.
        Errors raised while reading the body surface as TransportError.
    """
    resp = _get(url, headers, timeout, stream=True)
    length = resp.headers.get('Content-Length')
    total = int(length) if length and length.isdigit() else None
    if resp.headers.get('Content-Encoding', 'identity') != 'identity':
        # iter_content decodes, so the header length no longer matches
        total = None

    def chunks():
        with resp:
            try:
                for chunk in resp.iter_content(chunk_size=chunk_size):
                    if chunk:
                        yield chunk
            except requests.RequestException as e:
                raise TransportError(url, e) from e

    return total, chunks()
