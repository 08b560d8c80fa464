"""
Initial schema for Hotelbook

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '20261017_0001'
down_revision = None
branch_labels = None
depends_on = None


def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False


def _create_account_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(f'ix_{name}_id', name, ['id'])
    op.create_index(f'ix_{name}_email', name, ['email'], unique=True)


def upgrade() -> None:
    bind = op.get_bind()

    # tables may already exist when init_db ran create_all first
    for name in ('users', 'admins'):
        if not _has_table(bind, name):
            _create_account_table(name)

    if not _has_table(bind, 'hotels'):
        op.create_table(
            'hotels',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('price', sa.Numeric(10, 2), nullable=False),
            sa.Column('city', sa.String(length=120), nullable=False),
            sa.Column('img_data', sa.LargeBinary(), nullable=True),
            sa.Column('img_content_type', sa.String(length=100), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_hotels_id', 'hotels', ['id'])
        op.create_index('ix_hotels_name', 'hotels', ['name'])
        op.create_index('ix_hotels_city', 'hotels', ['city'])

    # user_id / hotel_id carry no foreign keys; deleted hotels leave bookings behind
    if not _has_table(bind, 'bookings'):
        op.create_table(
            'bookings',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('hotel_id', sa.Integer(), nullable=False),
            sa.Column('check_in_date', sa.DateTime(), nullable=False),
            sa.Column('check_out_date', sa.DateTime(), nullable=False),
            sa.Column('room_type', sa.String(length=100), nullable=False),
            sa.Column('person_count', sa.Integer(), nullable=False),
            sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_bookings_id', 'bookings', ['id'])
        op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
        op.create_index('ix_bookings_hotel_id', 'bookings', ['hotel_id'])


def downgrade() -> None:
    op.drop_table('bookings')
    op.drop_table('hotels')
    op.drop_table('admins')
    op.drop_table('users')
