from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from repofeed.config.db import is_unique_violation
from repofeed.core.exceptions import StorageFailure
from repofeed.models.repo import Repo
from repofeed.utils.logger import logger


def resolve_repo(
    session: Session, name: str, url: Optional[str] = None, icon: Optional[str] = None
) -> int:
    """Return the id of the repo named `name`, creating the row on first sight."""
    try:
        existing = Repo.first_by(session, name=name)
        if existing:
            return existing.id

        repo = Repo(name=name, url=url, icon=icon).save(session)
        logger.info(f"Created repository {repo}")
        return repo.id
    except IntegrityError as e:
        session.rollback()
        if not is_unique_violation(e):
            logger.error(f"Failed to create repository {name}: {e}")
            raise StorageFailure(f"Failed to create repository {name}") from e

        # A concurrent delivery created it between our lookup and insert.
        logger.info(f"Repository {name} was created concurrently, re-reading it.")
        try:
            existing = Repo.first_by(session, name=name)
        except SQLAlchemyError as read_error:
            raise StorageFailure(f"Failed to read repository {name}") from read_error
        if existing is None:
            raise StorageFailure(f"Repository {name} vanished after a conflict")
        return existing.id
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to resolve repository {name}: {e}")
        raise StorageFailure(f"Failed to resolve repository {name}") from e
