"""add_recommendation_tables

Revision ID: 5d3a9c1e7b20
Revises:
Create Date: 2025-11-14 10:12:41.503117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d3a9c1e7b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

verification_status = sa.Enum('PENDING', 'VERIFIED', 'REJECTED', name='verificationstatus')
booking_status = sa.Enum('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED', name='bookingstatus')
interaction_event_type = sa.Enum(
    'VIEW', 'PROFILE_OPEN', 'BOOKMARK', 'UNBOOKMARK', 'MESSAGE_SENT',
    'BOOKING_STARTED', 'BOOKING_COMPLETED', 'BOOKING_CANCELLED',
    name='interactioneventtype',
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'companion_profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('height_cm', sa.Integer(), nullable=True),
        sa.Column('languages', sa.JSON(), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('rating_avg', sa.Numeric(3, 2), nullable=False, server_default='0'),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_bookings', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_bookings', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('verification_status', verification_status, nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_companion_profiles_id', 'companion_profiles', ['id'])
    op.create_index('ix_companion_profiles_user_id', 'companion_profiles', ['user_id'])
    op.create_index('ix_companion_profiles_is_active', 'companion_profiles', ['is_active'])
    op.create_index('ix_companion_profiles_is_hidden', 'companion_profiles', ['is_hidden'])
    op.create_index('ix_companion_profiles_verification_status', 'companion_profiles', ['verification_status'])

    op.create_table(
        'companion_photos',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('companion_id', sa.UUID(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['companion_id'], ['companion_profiles.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_companion_photos_id', 'companion_photos', ['id'])
    op.create_index('ix_companion_photos_companion_id', 'companion_photos', ['companion_id'])

    op.create_table(
        'companion_services',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('companion_id', sa.UUID(), nullable=False),
        sa.Column('occasion_type', sa.String(length=50), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['companion_id'], ['companion_profiles.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_companion_services_id', 'companion_services', ['id'])
    op.create_index('ix_companion_services_companion_id', 'companion_services', ['companion_id'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('hirer_id', sa.UUID(), nullable=False),
        sa.Column('companion_id', sa.UUID(), nullable=False),
        sa.Column('occasion_type', sa.String(length=50), nullable=True),
        sa.Column('status', booking_status, nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['hirer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['companion_id'], ['users.id']),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])
    op.create_index('ix_bookings_hirer_id', 'bookings', ['hirer_id'])
    op.create_index('ix_bookings_companion_id', 'bookings', ['companion_id'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])
    op.create_index('ix_bookings_created_at', 'bookings', ['created_at'])

    op.create_table(
        'favorite_companions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('hirer_id', sa.UUID(), nullable=False),
        sa.Column('companion_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['hirer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['companion_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('hirer_id', 'companion_id', name='unique_hirer_companion_favorite'),
    )
    op.create_index('ix_favorite_companions_id', 'favorite_companions', ['id'])
    op.create_index('ix_favorite_companions_hirer_id', 'favorite_companions', ['hirer_id'])
    op.create_index('ix_favorite_companions_companion_id', 'favorite_companions', ['companion_id'])

    op.create_table(
        'user_blocks',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('blocker_id', sa.UUID(), nullable=False),
        sa.Column('blocked_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['blocker_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['blocked_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('blocker_id', 'blocked_id', name='unique_user_block'),
    )
    op.create_index('ix_user_blocks_id', 'user_blocks', ['id'])
    op.create_index('ix_user_blocks_blocker_id', 'user_blocks', ['blocker_id'])
    op.create_index('ix_user_blocks_blocked_id', 'user_blocks', ['blocked_id'])

    op.create_table(
        'user_interactions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('companion_id', sa.UUID(), nullable=False),
        sa.Column('event_type', interaction_event_type, nullable=False),
        sa.Column('event_value', sa.Float(), nullable=False, server_default='0'),
        sa.Column('dwell_time_ms', sa.Integer(), nullable=True),
        sa.Column('session_id', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['companion_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_user_interactions_id', 'user_interactions', ['id'])
    op.create_index('ix_user_interactions_user_id', 'user_interactions', ['user_id'])
    op.create_index('ix_user_interactions_companion_id', 'user_interactions', ['companion_id'])
    op.create_index('ix_user_interactions_created_at', 'user_interactions', ['created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('user_interactions')
    op.drop_table('user_blocks')
    op.drop_table('favorite_companions')
    op.drop_table('bookings')
    op.drop_table('companion_services')
    op.drop_table('companion_photos')
    op.drop_table('companion_profiles')
    op.drop_table('users')

    interaction_event_type.drop(op.get_bind(), checkfirst=True)
    booking_status.drop(op.get_bind(), checkfirst=True)
    verification_status.drop(op.get_bind(), checkfirst=True)
