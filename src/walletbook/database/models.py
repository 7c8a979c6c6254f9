"""SQLAlchemy models for walletbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Platform(Base):
    """Account ("platform") model."""

    __tablename__ = "platforms"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    balance = Column(Numeric(18, 2), nullable=False, default=0)
    is_savings = Column(Boolean, default=False, nullable=False)
    color = Column(String, nullable=False, default="blue")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model.

    Account references are plain IDs without a foreign key: deleting an
    account leaves its transactions in place.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    subcategory = Column(String, nullable=False, default="")
    amount = Column(Numeric(18, 2), nullable=False)
    account_id = Column(Integer, nullable=False, index=True)
    destination_account_id = Column(Integer, nullable=True)
    receipt_url = Column(String, nullable=True)
    struck = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Category(Base):
    """Category model with a single level of nesting."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False, default="expense")
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")


class Budget(Base):
    """Budget model. Spending is computed, not stored."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    category = Column(String, nullable=False)
    subcategory = Column(String, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    period = Column(String, nullable=False, default="monthly")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    target = Column(Numeric(18, 2), nullable=False)
    current = Column(Numeric(18, 2), nullable=False, default=0)
    deadline = Column(Date, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Debt(Base):
    """Debt model."""

    __tablename__ = "debts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    total = Column(Numeric(18, 2), nullable=False)
    remaining = Column(Numeric(18, 2), nullable=False)
    interest = Column(Numeric(7, 3), nullable=False, default=0)
    minimum = Column(Numeric(18, 2), nullable=False, default=0)
    due_date = Column(Date, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Profile(Base):
    """User profile model."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, unique=True)
    full_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    location = Column(String, nullable=True)
    birth_date = Column(Date, nullable=True)
    avatar_url = Column(String, nullable=True)


class UserSettings(Base):
    """User settings model."""

    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=True, unique=True)
    language = Column(String, nullable=False, default="id")
    theme = Column(String, nullable=False, default="system")
    payroll_date = Column(Integer, nullable=True)
    budget_warning_threshold = Column(Integer, nullable=False, default=80)
    updated_at = Column(DateTime, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
