# commands.py

import click
from flask import current_app
from flask.cli import with_appcontext
from extensions import db


@click.command('init-db')
@with_appcontext
def init_db():
    """Create the contact tables directly, without running migrations"""
    import contact_database  # noqa: F401
    db.create_all()
    click.echo('Database tables created.')


@click.command('restore-contact')
@click.argument('contact_id', type=int)
@with_appcontext
def restore_contact(contact_id):
    """Restore a soft-deleted contact"""
    contact_service = current_app.services.get('contact')
    result = contact_service.restore_contact(contact_id)
    if result.is_failure:
        raise click.ClickException(result.error)
    click.echo(f'Contact {contact_id} restored.')


@click.command('list-deleted-contacts')
@with_appcontext
def list_deleted_contacts():
    """Show soft-deleted contacts that can still be restored"""
    contact_repository = current_app.services.get('contact_repository')
    for contact in contact_repository.find_deleted():
        click.echo(f'{contact.id}\t{contact.email}\tdeleted {contact.deleted_at.isoformat()}')


def init_app(app):
    """Register commands with the Flask app"""
    app.cli.add_command(init_db)
    app.cli.add_command(restore_contact)
    app.cli.add_command(list_deleted_contacts)
