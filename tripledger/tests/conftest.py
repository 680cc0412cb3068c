"""
Shared fixtures: sample members, expense builders and an in-memory database.
"""
import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tripledger.models  # noqa: F401
from tripledger.db.base import Base
from tripledger.db.session import get_db
from tripledger.main import app
from tripledger.schemas.expense import Expense, SplitType
from tripledger.schemas.member import Member
from tripledger.schemas.payment import RecordedPayment
from tripledger.schemas.settlement import MemberFinancials


def make_expense(expense_id, amount, paid_by, participants, split_details=None, **kwargs):
    """Expense read model; passing split_details makes it an unequal split."""
    split_type = SplitType.UNEQUALLY if split_details is not None else SplitType.EQUALLY
    return Expense(
        id=expense_id,
        amount=Decimal(str(amount)),
        currency=kwargs.pop("currency", "INR"),
        paid_by=paid_by,
        participants=participants,
        split_type=kwargs.pop("split_type", split_type),
        split_details=(
            {k: Decimal(str(v)) for k, v in split_details.items()}
            if split_details is not None else None
        ),
        **kwargs,
    )


def make_payment(payment_id, from_user_id, to_user_id, amount, **kwargs):
    return RecordedPayment(
        id=payment_id,
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        amount=Decimal(str(amount)),
        currency=kwargs.pop("currency", "INR"),
        recorded_by=kwargs.pop("recorded_by", from_user_id),
        **kwargs,
    )


def make_financials(balances):
    """MemberFinancials rows from {member_id: net_balance}."""
    return [
        MemberFinancials(
            member_id=member_id,
            member_name=member_id.title(),
            total_paid=Decimal(0),
            total_share=Decimal(0),
            initial_net_balance=Decimal(str(balance)),
            net_balance=Decimal(str(balance)),
        )
        for member_id, balance in balances.items()
    ]


@pytest.fixture
def members():
    """Three members of one trip."""
    return [
        Member(id="alice", display_name="Alice", email="alice@example.com"),
        Member(id="bob", display_name="Bob"),
        Member(id="carol", display_name="Carol"),
    ]


@pytest.fixture
def dinner(members):
    """Alice pays 90, split equally among all three."""
    return make_expense("e1", 90, "alice", ["alice", "bob", "carol"], category="Food", description="Dinner")


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """API client bound to the in-memory database."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
