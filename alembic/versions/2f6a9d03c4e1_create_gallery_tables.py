"""create_gallery_tables

Revision ID: 2f6a9d03c4e1
Revises:
Create Date: 2026-10-19 09:48:05.730114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '2f6a9d03c4e1'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('artists',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_image', sa.String(), nullable=True),
        sa.Column('specialty', sa.String(), nullable=True),
        sa.Column('exhibitions', sa.JSON(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('portal_access', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_completed_onboarding', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pre_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_hidden', sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_artists_id'), 'artists', ['id'], unique=False)

    op.create_table('artworks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('artist_id', sa.Integer(), nullable=False),
        sa.Column('year', sa.String(), nullable=False),
        sa.Column('medium', sa.String(), nullable=False),
        sa.Column('dimensions', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='Available'),
        sa.Column('featured', sa.Integer(), nullable=True, server_default='0'),
        sa.Column('width_cm', sa.Numeric(8, 2), nullable=True),
        sa.Column('height_cm', sa.Numeric(8, 2), nullable=True),
        sa.Column('depth_cm', sa.Numeric(8, 2), nullable=True),
        sa.Column('is_sculpture', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_framed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('location', sa.String(), nullable=False, server_default='Gallery'),
        sa.Column('original_image', sa.String(), nullable=True),
        sa.Column('watermarked_image', sa.String(), nullable=True),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('approval_status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_artworks_id'), 'artworks', ['id'], unique=False)
    op.create_index(op.f('ix_artworks_artist_id'), 'artworks', ['artist_id'], unique=False)

    op.create_table('events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('event_type', sa.String(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('featured_image', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True, server_default='Upcoming'),
        sa.Column('is_canceled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('registration_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('registration_type', sa.String(), nullable=False, server_default='modal'),
        sa.Column('registration_url', sa.String(), nullable=True),
        sa.Column('external_url', sa.String(), nullable=True),
        sa.Column('payment_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_free_event', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_tiers', sa.JSON(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('recurring_type', sa.String(), nullable=True),
        sa.Column('recurring_days', sa.JSON(), nullable=True),
        sa.Column('recurring_start_time', sa.String(), nullable=True),
        sa.Column('recurring_end_time', sa.String(), nullable=True),
        sa.Column('parent_event_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['parent_event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_events_id'), 'events', ['id'], unique=False)

    op.create_table('event_registrations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('number_of_attendees', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('additional_information', sa.Text(), nullable=True),
        sa.Column('registration_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_event_registrations_id'), 'event_registrations', ['id'], unique=False)
    op.create_index(op.f('ix_event_registrations_event_id'), 'event_registrations', ['event_id'], unique=False)

    op.create_table('inquiries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('artwork_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_inquiries_id'), 'inquiries', ['id'], unique=False)
    op.create_index(op.f('ix_inquiries_artwork_id'), 'inquiries', ['artwork_id'], unique=False)

    op.create_table('artist_invitations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('specialty', sa.String(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('invited_by', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code')
    )
    op.create_index(op.f('ix_artist_invitations_id'), 'artist_invitations', ['id'], unique=False)
    op.create_index(op.f('ix_artist_invitations_email'), 'artist_invitations', ['email'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_artist_invitations_email'), table_name='artist_invitations')
    op.drop_index(op.f('ix_artist_invitations_id'), table_name='artist_invitations')
    op.drop_table('artist_invitations')
    op.drop_index(op.f('ix_inquiries_artwork_id'), table_name='inquiries')
    op.drop_index(op.f('ix_inquiries_id'), table_name='inquiries')
    op.drop_table('inquiries')
    op.drop_index(op.f('ix_event_registrations_event_id'), table_name='event_registrations')
    op.drop_index(op.f('ix_event_registrations_id'), table_name='event_registrations')
    op.drop_table('event_registrations')
    op.drop_index(op.f('ix_events_id'), table_name='events')
    op.drop_table('events')
    op.drop_index(op.f('ix_artworks_artist_id'), table_name='artworks')
    op.drop_index(op.f('ix_artworks_id'), table_name='artworks')
    op.drop_table('artworks')
    op.drop_index(op.f('ix_artists_id'), table_name='artists')
    op.drop_table('artists')
