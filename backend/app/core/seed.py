import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import hash_password
from app.models.user import User

logger = logging.getLogger("boochtracker.seed")


def seed_default_admin(db: Session) -> User | None:
    """Create the configured admin account unless a matching user already exists."""
    existing = (
        db.query(User)
        .filter(
            or_(
                User.username == settings.default_admin_username,
                User.email == settings.default_admin_email,
            )
        )
        .first()
    )
    if existing:
        return None

    admin = User(
        username=settings.default_admin_username,
        email=settings.default_admin_email,
        password_hash=hash_password(settings.default_admin_password),
        is_admin=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.warning("created default admin user %r; change its password", admin.username)
    return admin
