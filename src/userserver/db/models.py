"""SQLAlchemy model for the 'users' table."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class User(Base):
    """
    A row of the 'users' table.

    The database assigns ``id``; every other column can be replaced by an
    update. ``age`` and ``phone`` are optional and stored as NULL when a
    request leaves them out.
    """
    __tablename__ = "users"

    # SERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid) on SQLite
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    age = Column(Integer, nullable=True)
    phone = Column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
