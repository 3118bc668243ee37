from datetime import timedelta

import pytest

from passwords.application.blocker import Blocker
from passwords.application.password_service import PasswordService
from tests.fakes import FakeClock, FakeCredentialRepo, FakeHasher


@pytest.fixture()
def repo():
    return FakeCredentialRepo()


@pytest.fixture()
def hasher():
    return FakeHasher()


@pytest.fixture()
def blocker(repo):
    return Blocker(repo)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def service(repo, hasher, blocker, clock):
    return PasswordService(
        repository=repo,
        hasher=hasher,
        blocker=blocker,
        lifetime=timedelta(hours=1),
        now=clock,
    )
