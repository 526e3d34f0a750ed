"""Initial BoxShip schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-01-12

Creates countries, box_types, users, shipments and tracking_history.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - create all BoxShip tables."""
    op.create_table('countries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('code', sa.String(length=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('multiplier', sa.Numeric(precision=8, scale=4), nullable=False),
        sa.Column('continent', sa.String(length=20), nullable=False),
        sa.Column('shipping_zone', sa.String(length=10), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('multiplier >= 0', name='ck_countries_multiplier_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_countries_id'), 'countries', ['id'], unique=False)
    op.create_index(op.f('ix_countries_code'), 'countries', ['code'], unique=True)
    op.create_index(op.f('ix_countries_continent'), 'countries', ['continent'], unique=False)

    op.create_table('box_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('length', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('width', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('height', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('weight', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('color', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('length > 0', name='ck_box_types_length_positive'),
        sa.CheckConstraint('width > 0', name='ck_box_types_width_positive'),
        sa.CheckConstraint('height > 0', name='ck_box_types_height_positive'),
        sa.CheckConstraint('weight > 0', name='ck_box_types_weight_positive'),
        sa.CheckConstraint('base_price > 0', name='ck_box_types_base_price_positive'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_box_types_id'), 'box_types', ['id'], unique=False)

    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('contact_number', sa.String(length=20), nullable=True),
        sa.Column('street', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('country_id', sa.Integer(), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['country_id'], ['countries.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_country_id'), 'users', ['country_id'], unique=False)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table('shipments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tracking_number', sa.String(length=50), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=True),
        sa.Column('receiver_first_name', sa.String(length=50), nullable=False),
        sa.Column('receiver_last_name', sa.String(length=50), nullable=False),
        sa.Column('receiver_email', sa.String(length=255), nullable=False),
        sa.Column('receiver_contact_number', sa.String(length=20), nullable=False),
        sa.Column('receiver_street', sa.String(length=255), nullable=False),
        sa.Column('receiver_city', sa.String(length=100), nullable=False),
        sa.Column('receiver_state', sa.String(length=100), nullable=True),
        sa.Column('receiver_zip_code', sa.String(length=20), nullable=False),
        sa.Column('receiver_country_id', sa.Integer(), nullable=False),
        sa.Column('box_type_id', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('contents', sa.Text(), nullable=False),
        sa.Column('is_fragile', sa.Boolean(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('shipping_cost', sa.Numeric(precision=12, scale=4), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('estimated_delivery_date', sa.DateTime(), nullable=True),
        sa.Column('actual_delivery_date', sa.DateTime(), nullable=True),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=True),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('is_insured', sa.Boolean(), nullable=False),
        sa.Column('insured_value', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('weight > 0', name='ck_shipments_weight_positive'),
        sa.CheckConstraint('shipping_cost >= 0', name='ck_shipments_cost_non_negative'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['receiver_country_id'], ['countries.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['box_type_id'], ['box_types.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shipments_id'), 'shipments', ['id'], unique=False)
    op.create_index(op.f('ix_shipments_tracking_number'), 'shipments', ['tracking_number'], unique=True)
    op.create_index(op.f('ix_shipments_sender_id'), 'shipments', ['sender_id'], unique=False)
    op.create_index(op.f('ix_shipments_receiver_email'), 'shipments', ['receiver_email'], unique=False)
    op.create_index(op.f('ix_shipments_receiver_country_id'), 'shipments', ['receiver_country_id'], unique=False)
    op.create_index(op.f('ix_shipments_box_type_id'), 'shipments', ['box_type_id'], unique=False)
    op.create_index(op.f('ix_shipments_priority'), 'shipments', ['priority'], unique=False)
    op.create_index(op.f('ix_shipments_status'), 'shipments', ['status'], unique=False)
    op.create_index(op.f('ix_shipments_payment_status'), 'shipments', ['payment_status'], unique=False)
    op.create_index(op.f('ix_shipments_created_at'), 'shipments', ['created_at'], unique=False)

    op.create_table('tracking_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('shipment_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['shipment_id'], ['shipments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tracking_history_id'), 'tracking_history', ['id'], unique=False)
    op.create_index(op.f('ix_tracking_history_shipment_id'), 'tracking_history', ['shipment_id'], unique=False)
    op.create_index(op.f('ix_tracking_history_timestamp'), 'tracking_history', ['timestamp'], unique=False)


def downgrade() -> None:
    """Downgrade schema - drop all BoxShip tables."""
    op.drop_table('tracking_history')
    op.drop_table('shipments')
    op.drop_table('users')
    op.drop_table('box_types')
    op.drop_table('countries')
