"""ORM model for storefront accounts (credentials, role, recovery question)."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func

from artshop.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'. email is stored lowercased.
    security_question and security_answer are either both set or both NULL;
    security_answer holds a bcrypt digest of the normalized answer.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="role_valid"),
        CheckConstraint(
            "(security_question IS NULL) = (security_answer IS NULL)",
            name="recovery_pair",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    security_question = Column(String(255), nullable=True)
    security_answer = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def has_recovery(self) -> bool:
        return bool(self.security_question) and bool(self.security_answer)
