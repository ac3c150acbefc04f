# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/propdesk/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (use `flask db upgrade` for managed schemas).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask system seed
#   Replace all data with the demo portfolio (manager/tenant/owner, password123).
#
# User inspection/bootstrap:
# - python -m flask users list [--role tenant]
# - python -m flask users create --email a@b.com --name "Ann" --role property_owner --password secret1
#
# Maintenance:
# - python -m flask sessions cleanup --days 30
#   Delete expired or revoked sessions older than the window.

from datetime import datetime
from decimal import Decimal

import click
from flask.cli import with_appcontext

from .errors import UserAlreadyExists, ValidationError
from .extensions import db
from .models import (
    Document,
    Lease,
    MaintenanceRequest,
    Payment,
    Property,
    SessionToken,
    Tenant,
    User,
    ROLES,
    ROLE_MANAGER,
    ROLE_OWNER,
    ROLE_TENANT,
)
from .services import auth_service, session_service


DEMO_PASSWORD = "password123"


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Tables created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system seed' for demo data.")


def clear_data() -> None:
    """Delete every row, children first."""
    for model in (SessionToken, Document, Payment, MaintenanceRequest):
        db.session.query(model).delete(synchronize_session=False)
    # tenants.lease_id points back at leases
    db.session.query(Tenant).update({Tenant.lease_id: None}, synchronize_session=False)
    for model in (Lease, Tenant, Property, User):
        db.session.query(model).delete(synchronize_session=False)
    db.session.commit()


def seed_demo_data() -> dict:
    """
    Populate a small demo portfolio and return the created users by role.

    One manager, one tenant and one owner (all DEMO_PASSWORD), two
    properties owned by the owner and managed by the manager, a tenant
    profile with a lease on the first property, one paid and one pending
    rent payment, and two maintenance requests.
    """
    clear_data()

    password_hash = auth_service.hash_password(DEMO_PASSWORD)
    manager = User(email="manager@propdesk.local", password_hash=password_hash,
                   name="John Manager", role=ROLE_MANAGER, phone="555-0101")
    tenant_user = User(email="tenant@propdesk.local", password_hash=password_hash,
                       name="Jane Tenant", role=ROLE_TENANT, phone="555-0102")
    owner = User(email="owner@propdesk.local", password_hash=password_hash,
                 name="Bob Owner", role=ROLE_OWNER, phone="555-0103")
    db.session.add_all([manager, tenant_user, owner])
    db.session.flush()

    sunset = Property(
        name="Sunset Apartments", address="123 Main St", city="Springfield", state="IL",
        zip_code="62701", type="apartment", bedrooms=2, bathrooms=1, square_feet=1200,
        rent_amount=Decimal("1200.00"), status="occupied", owner_id=owner.id, manager_id=manager.id,
        description="Beautiful 2-bedroom apartment in downtown area",
    )
    oakwood = Property(
        name="Oakwood House", address="456 Oak Ave", city="Springfield", state="IL",
        zip_code="62702", type="house", bedrooms=3, bathrooms=2, square_feet=1800,
        rent_amount=Decimal("1800.00"), status="available", owner_id=owner.id, manager_id=manager.id,
        description="Spacious 3-bedroom house with backyard",
    )
    db.session.add_all([sunset, oakwood])
    db.session.flush()

    profile = Tenant(
        user_id=tenant_user.id, property_id=sunset.id, move_in_date=datetime(2024, 1, 1),
        status="active", emergency_contact_name="John Doe", emergency_contact_phone="555-9999",
        emergency_contact_relationship="Parent",
    )
    db.session.add(profile)
    db.session.flush()

    lease = Lease(
        property_id=sunset.id, tenant_id=profile.id, start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 12, 31), monthly_rent=Decimal("1200.00"), deposit=Decimal("2400.00"),
        status="active", signed_date=datetime(2023, 12, 15),
    )
    db.session.add(lease)
    db.session.flush()
    profile.lease_id = lease.id

    db.session.add_all([
        Payment(lease_id=lease.id, tenant_id=profile.id, property_id=sunset.id,
                amount=Decimal("1200.00"), due_date=datetime(2024, 2, 1), paid_date=datetime(2024, 1, 28),
                status="paid", type="rent", method="bank_transfer"),
        Payment(lease_id=lease.id, tenant_id=profile.id, property_id=sunset.id,
                amount=Decimal("1200.00"), due_date=datetime(2024, 3, 1),
                status="pending", type="rent"),
        MaintenanceRequest(property_id=sunset.id, tenant_id=profile.id, title="Leaky Faucet",
                           description="The kitchen faucet has been leaking for the past week",
                           category="plumbing", priority="medium", status="pending",
                           requested_date=datetime(2024, 2, 10)),
        MaintenanceRequest(property_id=sunset.id, tenant_id=profile.id, title="AC Not Working",
                           description="Air conditioning unit stopped working in the living room",
                           category="hvac", priority="high", status="in_progress",
                           requested_date=datetime(2024, 2, 5), assigned_to=manager.id),
    ])
    db.session.commit()

    return {ROLE_MANAGER: manager, ROLE_TENANT: tenant_user, ROLE_OWNER: owner}


@system_group.command('seed')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def seed(yes):
    """Replace ALL data with the demo portfolio."""
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA before seeding. Are you sure?", abort=True)

    users = seed_demo_data()

    click.echo("DONE Database seeded.")
    click.echo("\nDemo credentials (development only):")
    for role, user in users.items():
        click.echo(f"   {role:<17} -> {user.email:<24} / {DEMO_PASSWORD}")


# =============================================================================
# USER MANAGEMENT COMMANDS
# =============================================================================

@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('list')
@click.option('--role', type=click.Choice(ROLES), help='Filter by role')
@with_appcontext
def list_users(role):
    """List all users."""
    query = db.session.query(User)
    if role:
        query = query.filter_by(role=role)
    users = query.order_by(User.email).all()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*100)
    click.echo(f"{'ID':<38} {'Email':<30} {'Name':<20} {'Role'}")
    click.echo("="*100)
    for user in users:
        click.echo(f"{user.id:<38} {user.email:<30} {user.name:<20} {user.role}")
    click.echo("="*100 + "\n")


@users_group.command('create')
@click.option('--email', prompt=True, help='Email address')
@click.option('--name', prompt=True, help='Display name')
@click.option('--role', type=click.Choice(ROLES), prompt=True, help='Role')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--phone', default=None, help='Phone number')
@with_appcontext
def create_user_cli(email, name, role, password, phone):
    """Create a user with the same validation as POST /auth/register."""
    payload = {"email": email, "name": name, "role": role, "password": password}
    if phone:
        payload["phone"] = phone
    try:
        user = auth_service.register_user(payload)
    except UserAlreadyExists:
        raise click.ClickException(f"User '{email}' already exists")
    except ValidationError as e:
        details = "; ".join(f"{i['field']} {i['message']}" for i in e.errors) or e.message
        raise click.ClickException(f"Validation failed: {details}")

    click.echo(f"PASS Created user: {user.email} ({user.role}) ID: {user.id}")


# =============================================================================
# SESSION MAINTENANCE
# =============================================================================

@click.group('sessions')
def sessions_group():
    """Session token maintenance."""


@sessions_group.command('cleanup')
@click.option('--days', type=int, default=30, show_default=True,
              help='Only delete sessions created more than this many days ago')
@with_appcontext
def cleanup_sessions_cli(days):
    """Delete expired or revoked sessions."""
    deleted = session_service.cleanup_expired_sessions(older_than_days=days)
    click.echo(f"Deleted {deleted} sessions older than {days} days.")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(sessions_group)
