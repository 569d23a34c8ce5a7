"""Create contact_messages table

Revision ID: 001_create_contact_messages
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_contact_messages'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('contact_messages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('email_address', sa.String(length=100), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=False),
        sa.Column('message_text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Every default read filters on deleted_at IS NULL
    op.create_index('ix_contact_messages_deleted_at', 'contact_messages', ['deleted_at'])


def downgrade():
    op.drop_index('ix_contact_messages_deleted_at', table_name='contact_messages')
    op.drop_table('contact_messages')
