"""
Typed views over the release and asset JSON objects returned by GitHub
"""
from typing import NamedTuple, Optional

from .errors import MissingField


def _require(obj, field, kind):
    if not isinstance(obj, dict):
        raise MissingField(field, obj)
    value = obj.get(field)
    # bool is an int subclass, so check it explicitly for non-bool fields
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise MissingField(field, obj)
    return value


class ReleaseRecord(NamedTuple):
    tag_name: str
    prerelease: bool
    assets_url: str
    name: Optional[str] = None
    published_at: Optional[str] = None
    html_url: Optional[str] = None

    @staticmethod
    def is_prerelease(obj) -> bool:
        """
        Read only the prerelease flag of a raw release

        The scan needs this before deciding whether the rest of the record
        matters at all.
        """
        return _require(obj, 'prerelease', bool)

    @classmethod
    def from_json(cls, obj) -> 'ReleaseRecord':
        """
        Project a raw release object, raising MissingField if prerelease,
        tag_name or assets_url is absent or of the wrong type
        """
        return cls(
            tag_name=_require(obj, 'tag_name', str),
            prerelease=_require(obj, 'prerelease', bool),
            assets_url=_require(obj, 'assets_url', str),
            name=obj.get('name'),
            published_at=obj.get('published_at'),
            html_url=obj.get('html_url'),
        )


class AssetRecord(NamedTuple):
    name: str
    url: str
    size: Optional[int] = None
    content_type: Optional[str] = None
    browser_download_url: Optional[str] = None

    @classmethod
    def from_json(cls, obj) -> 'AssetRecord':
        return cls(
            name=_require(obj, 'name', str),
            url=_require(obj, 'url', str),
            size=obj.get('size'),
            content_type=obj.get('content_type'),
            browser_download_url=obj.get('browser_download_url'),
        )


def asset_name(obj) -> Optional[str]:
    """Name of a raw asset, or None if it has no string name"""
    if isinstance(obj, dict) and isinstance(obj.get('name'), str):
        return obj['name']
    return None
