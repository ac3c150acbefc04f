"""
Pytest fixtures for propdesk backend tests.

Provides the test database, a client, one user per role (plus a second
user per role for cross-visibility checks), and a small portfolio wired
through properties, tenant profiles, leases, payments, maintenance
requests and documents.
"""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from propdesk import create_app
from propdesk.extensions import db
from propdesk.models import (
    Document,
    Lease,
    MaintenanceRequest,
    Payment,
    Property,
    Tenant,
    User,
    ROLE_MANAGER,
    ROLE_OWNER,
    ROLE_TENANT,
)
from propdesk.services.auth_service import hash_password
from propdesk.time_utils import utcnow


PASSWORD = "password123"


def _wipe():
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'BCRYPT_ROUNDS': 4,
        'EXPOSE_ERROR_DETAILS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        _wipe()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        _wipe()

        yield db.session

        # Cleanup after test
        db.session.rollback()


def make_user(email: str, role: str, name: str = "Test User") -> User:
    user = User(email=email, password_hash=hash_password(PASSWORD), name=name, role=role)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(scope='function')
def users(db_session):
    """Two users per role; ids only, so tests never touch expired instances."""
    created = {
        "manager": make_user("manager@example.com", ROLE_MANAGER, "Mia Manager"),
        "manager2": make_user("manager2@example.com", ROLE_MANAGER, "Max Manager"),
        "owner": make_user("owner@example.com", ROLE_OWNER, "Olive Owner"),
        "owner2": make_user("owner2@example.com", ROLE_OWNER, "Oscar Owner"),
        "tenant": make_user("tenant@example.com", ROLE_TENANT, "Tina Tenant"),
        "tenant2": make_user("tenant2@example.com", ROLE_TENANT, "Theo Tenant"),
    }
    return SimpleNamespace(**{key: user.id for key, user in created.items()})


def add_property(owner_id: str, manager_id: str | None, name: str, rent: str = "1500.00") -> Property:
    prop = Property(
        name=name, address="1 Test Way", city="Springfield", state="IL", zip_code="62701",
        type="apartment", rent_amount=Decimal(rent), status="occupied",
        owner_id=owner_id, manager_id=manager_id,
    )
    db.session.add(prop)
    db.session.commit()
    return prop


def add_tenancy(user_id: str, property_id: str, rent: str = "1500.00") -> tuple[Tenant, Lease]:
    profile = Tenant(user_id=user_id, property_id=property_id, move_in_date=datetime(2024, 1, 1))
    db.session.add(profile)
    db.session.flush()
    lease = Lease(
        property_id=property_id, tenant_id=profile.id, start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 12, 31), monthly_rent=Decimal(rent), deposit=Decimal("3000.00"),
        signed_date=datetime(2023, 12, 15),
    )
    db.session.add(lease)
    db.session.flush()
    profile.lease_id = lease.id
    db.session.commit()
    return profile, lease


def add_payment(lease: Lease, amount: str, status: str = "paid", type_: str = "rent",
                due_date: datetime | None = None) -> Payment:
    payment = Payment(
        lease_id=lease.id, tenant_id=lease.tenant_id, property_id=lease.property_id,
        amount=Decimal(amount), due_date=due_date or utcnow(), status=status, type=type_,
    )
    db.session.add(payment)
    db.session.commit()
    return payment


def add_maintenance(lease: Lease, actual_cost: str | None = None, title: str = "Leaky faucet") -> MaintenanceRequest:
    req = MaintenanceRequest(
        property_id=lease.property_id, tenant_id=lease.tenant_id, title=title,
        description="Kitchen faucet drips all night long", category="plumbing",
        actual_cost=Decimal(actual_cost) if actual_cost is not None else None,
    )
    db.session.add(req)
    db.session.commit()
    return req


@pytest.fixture(scope='function')
def portfolio(db_session, users):
    """
    Two disjoint portfolios:

    A: owner/manager/tenant, one property with lease, a paid and a pending
       rent payment, one maintenance request and one document.
    B: owner2/manager2/tenant2, same shape.
    """
    ids = {}
    for suffix, owner, manager, tenant in (
        ("a", users.owner, users.manager, users.tenant),
        ("b", users.owner2, users.manager2, users.tenant2),
    ):
        prop = add_property(owner, manager, f"Property {suffix.upper()}")
        profile, lease = add_tenancy(tenant, prop.id)
        paid = add_payment(lease, "1500.00")
        pending = add_payment(lease, "1500.00", status="pending")
        req = add_maintenance(lease, actual_cost="250.00")
        doc = Document(
            name=f"lease-{suffix}.pdf", type="lease", url=f"/uploads/1-lease-{suffix}.pdf",
            property_id=prop.id, tenant_id=profile.id, lease_id=lease.id, uploaded_by=manager,
        )
        db.session.add(doc)
        db.session.commit()
        ids.update({
            f"property_{suffix}": prop.id,
            f"profile_{suffix}": profile.id,
            f"lease_{suffix}": lease.id,
            f"paid_{suffix}": paid.id,
            f"pending_{suffix}": pending.id,
            f"maintenance_{suffix}": req.id,
            f"document_{suffix}": doc.id,
        })
    return SimpleNamespace(**ids)


def get_auth_token(client, email: str, password: str = PASSWORD) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/auth/login', json={
        'email': email,
        'password': password
    })
    if response.status_code == 200:
        return response.json.get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def login(client, users):
    """login("owner") -> Authorization headers for that fixture user."""
    def _login(key: str) -> dict:
        email = {
            "manager": "manager@example.com",
            "manager2": "manager2@example.com",
            "owner": "owner@example.com",
            "owner2": "owner2@example.com",
            "tenant": "tenant@example.com",
            "tenant2": "tenant2@example.com",
        }[key]
        return auth_headers(get_auth_token(client, email))
    return _login
