# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/salesdash/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to salesdash (PowerShell: $env:FLASK_APP="salesdash").
# - Use: python -m flask <group> <command> [options]
#
# Data bootstrap/repair:
# - python -m flask data init
#   Create the key-value table and seed the two default accounts (idempotent).
# - python -m flask data reset --yes
#   DEV/TEST only: drop and recreate the table (deletes users, sales and session).
# - python -m flask data keys
#   List stored keys with their size and last update.
#
# Users:
# - python -m flask users list
# - python -m flask users create --username alice --password secret --role user
#
# Sales:
# - python -m flask sales list [--owner-id user-1]
# - python -m flask sales summary

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import ROLES, ROLE_USER
from .services import reporting_service
from .services.dashboard_service import current_dashboard
from .services.identity_service import DuplicateUsername
from .services.storage_service import SqlKeyValueStore
from .validation import InvalidInput


@click.group('data')
def data_group():
    """Key-value store bootstrap and repair commands."""


@data_group.command('init')
@with_appcontext
def init_data():
    """Create tables and seed default accounts on first run."""
    db.create_all()
    users = current_dashboard().reload().identity.users()
    click.echo(f"PASS Store ready with {len(users)} user(s)")


@data_group.command('reset')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_data(yes):
    """Drop and recreate the key-value table. Deletes everything."""
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    db.session.remove()
    db.drop_all()
    db.create_all()
    current_dashboard().reload()
    click.echo("PASS Store reset; default accounts seeded")


@data_group.command('keys')
@with_appcontext
def list_keys():
    """List stored keys."""
    entries = SqlKeyValueStore().entries()
    if not entries:
        click.echo("No keys stored")
        return
    for entry in entries:
        info = entry.to_dict()
        click.echo(f"{info['key']:<24} {info['size']:>8} bytes  {info['updated_at']}")


@click.group('users')
def users_group():
    """User inspection and bootstrap."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with their role."""
    for user in current_dashboard().identity.users():
        click.echo(f"{user.id:<40} {user.username:<20} {user.role:<6} {user.created_at}")


@users_group.command('create')
@click.option('--username', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--role', type=click.Choice(ROLES), default=ROLE_USER, show_default=True)
@with_appcontext
def create_user_cmd(username, password, role):
    """
    Create a user.

    Registration also replaces the session record, so the new account becomes
    the logged-in user.
    """
    try:
        user = current_dashboard().identity.register(username, password, role)
    except (DuplicateUsername, InvalidInput) as e:
        click.echo(f"FAIL Failed to create user '{username}': {e}")
        return
    click.echo(f"PASS Created {user.username} ({user.role}) id={user.id}")


@click.group('sales')
def sales_group():
    """Sales inspection."""


@sales_group.command('list')
@click.option('--owner-id', default=None, help='Only sales recorded by this user id')
@with_appcontext
def list_sales(owner_id):
    """List sales, newest first."""
    ledger = current_dashboard().ledger
    sales = ledger.sales_for_owner(owner_id) if owner_id else ledger.all_sales()
    if not sales:
        click.echo("No sales recorded yet")
        return
    for sale in reporting_service.sales_newest_first(sales):
        status = "PAID" if sale.is_paid else "UNPAID"
        click.echo(
            f"{sale.timestamp}  {sale.username:<16} {sale.name:<20} {sale.item:<16} "
            f"{sale.quantity:>4} x {sale.price:>10.2f} = {sale.amount:>10.2f}  {status}"
        )


@sales_group.command('summary')
@with_appcontext
def sales_summary():
    """Totals, top items and per-user debt."""
    dashboard = current_dashboard()
    sales = dashboard.ledger.all_sales()
    stats = reporting_service.payment_stats(sales)

    click.echo(f"Total revenue: {stats.total_revenue:.2f}")
    click.echo(f"Paid:   {stats.total_paid:.2f} ({stats.paid_count} sales)")
    click.echo(f"Unpaid: {stats.total_unpaid:.2f} ({stats.unpaid_count} sales)")

    items = reporting_service.top_items(sales, dashboard.top_items_limit)
    if items:
        click.echo("Top items:")
        for row in items:
            click.echo(f"  {row.item:<20} {row.count:>6}  {row.total_value:>10.2f}")

    debts = reporting_service.debt_breakdown(sales, dashboard.identity.users())
    if debts:
        click.echo("Outstanding debt:")
        for row in debts:
            click.echo(f"  {row.user.username:<20} {row.total:>10.2f}")


def register_commands(app):
    app.cli.add_command(data_group)
    app.cli.add_command(users_group)
    app.cli.add_command(sales_group)
