import pytest
from fastapi.testclient import TestClient

from passwords.application.blocker import Blocker
from passwords.main import create_app
from passwords.presentation.dependencies import (
    get_blocker,
    get_hasher,
    get_repository,
)
from tests.fakes import FakeCredentialRepo, FakeHasher


@pytest.fixture()
def app_and_deps():
    app = create_app()
    repo = FakeCredentialRepo()
    blocker = Blocker(repo)
    hasher = FakeHasher()

    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_blocker] = lambda: blocker
    app.dependency_overrides[get_hasher] = lambda: hasher

    try:
        yield app, repo, blocker
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _ = app_and_deps
    # no `with`: the lifespan (pool, repeater) is not started
    return TestClient(app, raise_server_exceptions=False)
