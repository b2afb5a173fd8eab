from unittest.mock import patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from repofeed.core.exceptions import StorageFailure
from repofeed.models.repo import Repo
from repofeed.utils.repo_resolver import resolve_repo


def test_creates_repo_on_first_sight(session):
    repo_id = resolve_repo(
        session, "octo/widgets", "https://github.com/octo/widgets", "https://a/b.png"
    )

    repo = Repo.get(session, repo_id)
    assert repo.name == "octo/widgets"
    assert repo.url == "https://github.com/octo/widgets"
    assert repo.icon == "https://a/b.png"


def test_returns_existing_repo(session):
    first = resolve_repo(session, "octo/widgets")
    second = resolve_repo(session, "octo/widgets")

    assert first == second
    assert len(Repo.find_by(session, name="octo/widgets")) == 1


def test_concurrent_creation_rereads_existing_row(session):
    existing = Repo(name="octo/widgets").save(session)

    # The lookup misses, as it would for a delivery racing a concurrent insert.
    with patch.object(Repo, "first_by", side_effect=[None, existing]):
        repo_id = resolve_repo(session, "octo/widgets")

    assert repo_id == existing.id
    assert len(Repo.find_by(session, name="octo/widgets")) == 1


def test_other_storage_errors_are_storage_failures(session):
    error = OperationalError("SELECT", {}, Exception("database is locked"))
    with patch.object(Repo, "first_by", side_effect=error):
        with pytest.raises(StorageFailure):
            resolve_repo(session, "octo/widgets")


def test_name_uniqueness_is_the_named_constraint(engine):
    inspector = inspect(engine)

    constraints = inspector.get_unique_constraints("repos")
    assert {"name": "uq_repos_name", "column_names": ["name"]} in [
        {"name": c["name"], "column_names": c["column_names"]} for c in constraints
    ]
    assert not any(index["unique"] for index in inspector.get_indexes("repos"))
