from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from dns_inventory.exceptions import DatabaseError
from dns_inventory.utils.SessionManager import SessionManager

class BaseService:
    @contextmanager
    def session_scope(self, engine):
        """
        Provide a transactional scope around a series of operations.

        Everything done inside the block is committed together, or rolled
        back together when anything raises. SQLAlchemy failures surface as
        DatabaseError; other exceptions propagate unchanged.

        Usage:
            with self.session_scope(engine) as session:
                ...
        """
        session = None
        try:
            with SessionManager(engine) as session:
                if session is None:
                    raise DatabaseError("No database engine available")
                yield session
                session.commit()
        except SQLAlchemyError as e:
            if session:
                session.rollback()
            raise DatabaseError(f"Transaction failed: {str(e)}") from e
        except Exception:
            if session:
                session.rollback()
            raise
