from unittest import mock

import pytest

from release_finder.tests.fake_github import FakeGitHub


@pytest.fixture
def github():
    fake = FakeGitHub()
    with mock.patch('release_finder.http.requests.get', new=fake):
        yield fake
