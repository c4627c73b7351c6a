"""
Find the latest releases of a GitHub repository and download their assets
"""
from .errors import (ConfigConsumed, FetchError, HTTPStatusError,
                     MalformedResponse, MissingField, TransportError)
from .finder import ReleaseFinderConfig, find_release
from .manager import AssetOutcome, AssetStatus, ReleaseManager
from .records import AssetRecord, ReleaseRecord

__version__ = '0.1'
