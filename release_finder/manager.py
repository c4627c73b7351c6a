"""
Handle on a single selected release and its assets
"""
import logging
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Sequence

from . import http
from .errors import FetchError
from .records import AssetRecord, asset_name

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Optional[int]], None]


class AssetStatus(Enum):
    NOT_FOUND = 'not_found'
    FETCHED = 'fetched'
    FAILED = 'failed'


class AssetOutcome(NamedTuple):
    """
    Result of fetching an asset by name

    data is set when status is FETCHED, error when status is FAILED
    """
    status: AssetStatus
    name: str
    data: Optional[bytes] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.status is AssetStatus.FETCHED


class ReleaseManager(object):
    """
    Read-only snapshot of a release: its tag and the raw asset records
    returned by GitHub, plus the identity needed to download them.

    Instances are created by find_release and never change afterwards.
    """
    __slots__ = ('_client', '_token', '_tag', '_assets', '_timeout')

    def __init__(self, client: str, token: Optional[str], tag: str,
                 assets: Sequence[dict], timeout=http.DEFAULT_TIMEOUT):
        object.__setattr__(self, '_client', client)
        object.__setattr__(self, '_token', token)
        object.__setattr__(self, '_tag', tag)
        object.__setattr__(self, '_assets', tuple(assets))
        object.__setattr__(self, '_timeout', timeout)

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __delattr__(self, name):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __repr__(self):
        return f'ReleaseManager(tag={self._tag!r}, assets={len(self._assets)})'

    @property
    def assets(self):
        return self._assets

    def get_release_tag(self) -> str:
        return self._tag

    def get_asset_names(self) -> List[str]:
        """Names of all assets in stored order, skipping any without a name"""
        names = [asset_name(a) for a in self._assets]
        return [n for n in names if n is not None]

    def _find(self, name: str) -> Optional[dict]:
        for a in self._assets:
            if asset_name(a) == name:
                return a
        return None

    def get_asset(self, name: str) -> Optional[AssetRecord]:
        """
        Describe the first asset called name without downloading it

        Returns None if no asset has that name
        """
        raw = self._find(name)
        if raw is None:
            return None
        return AssetRecord.from_json(raw)

    def fetch_asset(self, name: str, on_progress: Optional[ProgressCallback] = None) -> AssetOutcome:
        """
        Download the first asset whose name is exactly name

        Parameters:
            name: asset name to look for
            on_progress: if given, the body is streamed and this is called once
                         per chunk with (bytes received so far, total bytes or None)

        Returns:
            AssetOutcome distinguishing a missing asset from a failed download
        """
        raw = self._find(name)
        if raw is None:
            return AssetOutcome(AssetStatus.NOT_FOUND, name)

        headers = http.build_headers(self._client, self._token, accept=http.OCTET_STREAM)
        try:
            asset = AssetRecord.from_json(raw)
            if on_progress is None:
                data = http.get_bytes(asset.url, headers, timeout=self._timeout)
            else:
                data = self._stream(asset.url, headers, on_progress)
        except FetchError as e:
            logger.error('Failed to download %s from release %s: %s', name, self._tag, e)
            return AssetOutcome(AssetStatus.FAILED, name, error=e)

        logger.info('Downloaded %s (%d bytes) from release %s', name, len(data), self._tag)
        return AssetOutcome(AssetStatus.FETCHED, name, data=data)

    def _stream(self, url, headers, on_progress: ProgressCallback) -> bytes:
        total, chunks = http.stream_bytes(url, headers, timeout=self._timeout)
        buffer = bytearray()
        received = 0
        for chunk in chunks:
            received += len(chunk)
            on_progress(received, total)
            buffer.extend(chunk)
        return bytes(buffer)

    def get_asset_by_name(self, name: str) -> Optional[bytes]:
        """
        Bytes of the named asset, or None if it is absent or could not be
        downloaded. Use fetch_asset to tell the two apart.
        """
        return self.fetch_asset(name).data

    def get_asset_by_name_with_progress(self, name: str, on_progress: ProgressCallback) -> Optional[bytes]:
        return self.fetch_asset(name, on_progress=on_progress).data
