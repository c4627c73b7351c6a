"""
Find the latest stable and prerelease versions of a GitHub repository
"""
import logging
from typing import Optional, Tuple

from . import http
from .errors import ConfigConsumed, MissingField
from .manager import ReleaseManager
from .records import ReleaseRecord

logger = logging.getLogger(__name__)

FindResult = Tuple[Optional[ReleaseManager], Optional[ReleaseManager]]


class ReleaseFinderConfig(object):
    """
    Settings for a single release lookup, built up fluently:

        stable, pre = ReleaseFinderConfig('my-app/1.0') \\
            .with_author('octocat') \\
            .with_repository('hello-world') \\
            .with_prereleases(True) \\
            .find_release()

    A config can only be used for one lookup.
    """

    def __init__(self, client: str):
        self.client = client
        self.auth_token = None
        self.allow_prerelease = False
        self.author = ''
        self.repository = ''
        self.timeout = http.DEFAULT_TIMEOUT
        self.api_url = http.API_URL
        self.strict_records = True
        self._consumed = False

    def __setattr__(self, name, value):
        if getattr(self, '_consumed', False):
            raise ConfigConsumed()
        object.__setattr__(self, name, value)

    def _set(self, **kwargs) -> 'ReleaseFinderConfig':
        if self._consumed:
            raise ConfigConsumed()
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self

    def with_token(self, token: Optional[str]) -> 'ReleaseFinderConfig':
        return self._set(auth_token=token)

    def with_prereleases(self, allow_prerelease: bool) -> 'ReleaseFinderConfig':
        return self._set(allow_prerelease=allow_prerelease)

    def with_author(self, author: str) -> 'ReleaseFinderConfig':
        return self._set(author=author)

    def with_repository(self, repository: str) -> 'ReleaseFinderConfig':
        return self._set(repository=repository)

    def with_timeout(self, timeout) -> 'ReleaseFinderConfig':
        return self._set(timeout=timeout)

    def with_api_url(self, api_url: str) -> 'ReleaseFinderConfig':
        return self._set(api_url=api_url)

    def with_strict_records(self, strict: bool) -> 'ReleaseFinderConfig':
        """
        If False, releases with missing or invalid fields are skipped
        instead of aborting the lookup
        """
        return self._set(strict_records=strict)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def find_release(self) -> FindResult:
        return find_release(self)


def _manager_for(release: ReleaseRecord, config: ReleaseFinderConfig) -> ReleaseManager:
    headers = http.build_headers(config.client, config.auth_token)
    assets = http.get_json_array(release.assets_url, headers, timeout=config.timeout)
    logger.info('Selected %s release %s with %d assets',
                'pre' if release.prerelease else 'stable', release.tag_name, len(assets))
    return ReleaseManager(config.client, config.auth_token, release.tag_name, assets,
                          timeout=config.timeout)


def find_release(config: ReleaseFinderConfig) -> FindResult:
    """
    Query GitHub for the latest stable and, optionally, latest prerelease

    Releases are scanned in the order the API returns them (newest first) and
    the scan stops as soon as everything wanted has been found.

    Parameters:
        config: lookup settings. Consumed by this call.

    Returns:
        (stable, prerelease) ReleaseManagers, either of which may be None.
        prerelease is always None unless prereleases were enabled.

    Raises:
        ConfigConsumed if config was already used
        TransportError, MalformedResponse, MissingField on any failure,
        discarding whatever was found before it
    """
    if config.consumed:
        raise ConfigConsumed()
    config._consumed = True

    url = http.releases_url(config.author, config.repository, config.api_url)
    headers = http.build_headers(config.client, config.auth_token)
    releases = http.get_json_array(url, headers, timeout=config.timeout)
    logger.debug('%d releases listed for %s/%s', len(releases), config.author, config.repository)

    stable = None
    prerelease = None
    for raw in releases:
        try:
            is_pre = ReleaseRecord.is_prerelease(raw)
            wanted = (config.allow_prerelease and prerelease is None and is_pre) or \
                     (stable is None and not is_pre)
            record = ReleaseRecord.from_json(raw) if wanted else None
        except MissingField as e:
            if config.strict_records:
                raise
            logger.warning('Skipping invalid release record: %s', e)
            continue

        if record is not None:
            if is_pre:
                prerelease = _manager_for(record, config)
            else:
                stable = _manager_for(record, config)

        if stable is not None and (prerelease is not None or not config.allow_prerelease):
            break

    return stable, prerelease
