# pos_api/repositories/unit_of_work.py

import logging

from sqlalchemy.orm import Session

logger = logging.getLogger("pos_api.unit_of_work")


class UnitOfWork:
    """
    Atomic scope over a session.

    Writes made inside the `with` block only become visible once commit()
    is called. Leaving the block any other way (returning a ServiceError
    early, or an exception) rolls everything back. Exceptions are not
    swallowed.

        with UnitOfWork(db) as uow:
            ...
            if failed:
                return error
            uow.commit()
    """

    def __init__(self, db: Session):
        self.db = db
        self.committed = False

    def __enter__(self):
        self.committed = False
        return self

    def commit(self):
        self.db.commit()
        self.committed = True

    def rollback(self):
        self.db.rollback()

    def __exit__(self, exc_type, exc, tb):
        if not self.committed:
            if exc_type is not None:
                logger.warning("Rolling back unit of work after %s", exc_type.__name__)
            self.rollback()
        return False
