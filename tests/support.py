"""Shared builders for tests: in-memory database, claims and auth headers."""

from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import build_engine
from app.core.security import create_access_token
from app.models import Base, Role, User
from app.schemas.auth import IdentityClaim


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with all tables; one connection shared across threads."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def fast_hash(password: str) -> str:
    """Stand-in password hasher so service tests do not pay bcrypt's cost."""
    return f"hashed:{password}"


def add_user(db: Session, username: str, role: Role = Role.USER, password_hash: str = "hashed:pw") -> User:
    user = User(username=username, password_hash=password_hash, role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def claim(user_id: int | str, role: Role) -> IdentityClaim:
    return IdentityClaim(user_id=str(user_id), role=role)


def auth_headers(user_id: int | str, role: Role) -> dict[str, str]:
    token = create_access_token(sub=user_id, role=role)
    return {"Authorization": f"Bearer {token}"}
