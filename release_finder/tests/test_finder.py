import pytest
import requests

from release_finder import (ConfigConsumed, HTTPStatusError, MalformedResponse,
                            MissingField, ReleaseFinderConfig, TransportError, find_release)
from release_finder.tests.fake_github import asset, release, releases_url


def config(prereleases=False, token=None):
    return ReleaseFinderConfig('test-client/1.0') \
        .with_token(token) \
        .with_author('octocat') \
        .with_repository('hello') \
        .with_prereleases(prereleases)


def serve(github, releases, assets=None):
    github.add(releases_url(), releases)
    for r in releases:
        if isinstance(r, dict) and 'assets_url' in r:
            github.add(r['assets_url'], (assets or {}).get(r.get('tag_name'), []))


def test_prerelease_before_stable_with_prereleases_enabled(github):
    serve(github, [release('v2.0', True), release('v1.5', False)])

    stable, pre = find_release(config(prereleases=True))

    assert stable.get_release_tag() == 'v1.5'
    assert pre.get_release_tag() == 'v2.0'


def test_prereleases_disabled_never_fetches_prerelease_assets(github):
    releases = [release('v2.0', True), release('v1.5', False)]
    serve(github, releases)

    stable, pre = find_release(config())

    assert stable.get_release_tag() == 'v1.5'
    assert pre is None
    assert releases[0]['assets_url'] not in github.urls()


def test_first_match_in_response_order_wins(github):
    releases = [
        release('v3.0-rc2', True),
        release('v3.0-rc1', True),
        release('v2.1', False),
        release('v2.0', False),
    ]
    serve(github, releases)

    stable, pre = find_release(config(prereleases=True))

    assert stable.get_release_tag() == 'v2.1'
    assert pre.get_release_tag() == 'v3.0-rc2'


def test_scan_stops_once_both_found(github):
    releases = [
        release('v1.0', False),
        release('v1.1-beta', True),
        release('v0.9', False),
        {'broken': True},
    ]
    serve(github, releases)

    find_release(config(prereleases=True))

    assert github.urls() == [
        releases_url(),
        releases[0]['assets_url'],
        releases[1]['assets_url'],
    ]


def test_scan_stops_at_first_stable_when_prereleases_disabled(github):
    releases = [release('v1.0', False), {'not': 'a release'}]
    serve(github, releases)

    stable, pre = find_release(config())

    assert stable.get_release_tag() == 'v1.0'
    assert len(github.calls) == 2


def test_only_prereleases(github):
    serve(github, [release('v1.0-rc1', True)])

    stable, pre = find_release(config(prereleases=True))
    assert stable is None
    assert pre.get_release_tag() == 'v1.0-rc1'


def test_empty_release_list(github):
    serve(github, [])
    assert find_release(config(prereleases=True)) == (None, None)


def test_assets_are_attached_to_manager(github):
    serve(github, [release('v1.0', False)],
          assets={'v1.0': [asset('app.zip', 1), asset('app.tar.gz', 2)]})

    stable, _ = find_release(config())
    assert stable.get_asset_names() == ['app.zip', 'app.tar.gz']


def test_request_headers(github):
    serve(github, [release('v1.0', False)])

    find_release(config(token='s3cret'))

    for call in github.calls:
        assert call['headers']['Accept'] == 'application/vnd.github.v3+json'
        assert call['headers']['User-Agent'] == 'test-client/1.0'
        assert call['headers']['Authorization'] == 'token s3cret'


def test_no_authorization_header_without_token(github):
    serve(github, [release('v1.0', False)])

    find_release(config())

    assert all('Authorization' not in c['headers'] for c in github.calls)


def test_custom_api_url_and_timeout(github):
    url = 'https://github.example.com/api/v3/repos/octocat/hello/releases'
    github.add(url, [])

    cfg = config().with_api_url('https://github.example.com/api/v3/').with_timeout(5)
    find_release(cfg)

    assert github.calls[0]['url'] == url
    assert github.calls[0]['timeout'] == 5


def test_config_cannot_be_reused(github):
    serve(github, [])
    cfg = config()
    cfg.find_release()

    assert cfg.consumed
    with pytest.raises(ConfigConsumed):
        cfg.find_release()
    with pytest.raises(ConfigConsumed):
        cfg.with_prereleases(True)
    with pytest.raises(ConfigConsumed):
        cfg.author = 'someone-else'
    assert cfg.author == 'octocat'


def test_transport_failure(github):
    github.fail(releases_url())
    with pytest.raises(TransportError) as e:
        find_release(config())
    assert isinstance(e.value.reason, requests.ConnectionError)


def test_transport_failure_on_assets_discards_results(github):
    releases = [release('v1.0-rc', True), release('v1.0', False)]
    serve(github, releases)
    github.fail(releases[1]['assets_url'], requests.Timeout('timed out'))

    with pytest.raises(TransportError):
        find_release(config(prereleases=True))


def test_http_error_status_is_passed_through(github):
    github.add(releases_url(), {'message': 'API rate limit exceeded'}, status_code=403)

    with pytest.raises(HTTPStatusError) as e:
        find_release(config())
    assert e.value.status_code == 403
    assert isinstance(e.value, TransportError)


def test_non_array_response(github):
    github.add(releases_url(), {'message': 'unexpected'})
    with pytest.raises(MalformedResponse):
        find_release(config())


def test_invalid_json(github):
    github.add(releases_url(), b'<html>oops</html>')
    with pytest.raises(MalformedResponse):
        find_release(config())


def test_malformed_assets_response(github):
    releases = [release('v1.0', False)]
    github.add(releases_url(), releases)
    github.add(releases[0]['assets_url'], {'assets': []})

    with pytest.raises(MalformedResponse):
        find_release(config())


def test_missing_prerelease_flag_aborts(github):
    releases = [{'tag_name': 'v1.1', 'assets_url': 'x'}, release('v1.0', False)]
    serve(github, releases)

    with pytest.raises(MissingField) as e:
        find_release(config())
    assert e.value.field == 'prerelease'


def test_wrong_typed_prerelease_flag_aborts(github):
    serve(github, [release('v1.1', 'false'), release('v1.0', False)])

    with pytest.raises(MissingField):
        find_release(config())


def test_missing_field_after_candidate_found_aborts(github):
    releases = [release('v1.0', False), {'prerelease': True, 'tag_name': 'v1.1-rc'}]
    serve(github, releases)

    with pytest.raises(MissingField) as e:
        find_release(config(prereleases=True))
    assert e.value.field == 'assets_url'


def test_unselected_record_only_needs_prerelease_flag(github):
    # the second prerelease is never selected, so its other fields are not read
    releases = [release('v2.0-rc', True), {'prerelease': True}, release('v1.0', False)]
    serve(github, releases)

    stable, pre = find_release(config(prereleases=True))
    assert (stable.get_release_tag(), pre.get_release_tag()) == ('v1.0', 'v2.0-rc')


def test_lenient_records_are_skipped(github):
    releases = [
        {'tag_name': 'v1.2'},
        release('v1.1', 'yes'),
        {'prerelease': False, 'tag_name': 'v1.1'},
        release('v1.0', False),
    ]
    serve(github, releases)

    stable, pre = find_release(config().with_strict_records(False))
    assert stable.get_release_tag() == 'v1.0'
    assert pre is None
