"""add_display_orders_to_artworks

Revision ID: 8c2d41e7a9b3
Revises: 2f6a9d03c4e1
Create Date: 2026-10-19 10:12:31.418205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c2d41e7a9b3'
down_revision: Union[str, None] = '2f6a9d03c4e1'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('artworks',
        sa.Column('artist_display_order', sa.Integer(), nullable=True, server_default='0')
    )
    op.add_column('artworks',
        sa.Column('global_display_order', sa.Integer(), nullable=True, server_default='0')
    )

    op.create_index(
        op.f('ix_artworks_artist_display_order'),
        'artworks',
        ['artist_display_order'],
        unique=False
    )
    op.create_index(
        op.f('ix_artworks_global_display_order'),
        'artworks',
        ['global_display_order'],
        unique=False
    )

    # Dense 1..N orders for visible artworks, oldest first inside each artist.
    # global_display_order walks artists in ascending id, same as the populate endpoint
    op.execute("""
        UPDATE artworks
        SET artist_display_order = subquery.artist_row,
            global_display_order = subquery.global_row
        FROM (
            SELECT id,
                   ROW_NUMBER() OVER (PARTITION BY artist_id ORDER BY created_at ASC, id ASC) AS artist_row,
                   ROW_NUMBER() OVER (ORDER BY artist_id ASC, created_at ASC, id ASC) AS global_row
            FROM artworks
            WHERE is_visible = true
        ) AS subquery
        WHERE artworks.id = subquery.id
    """)


def downgrade() -> None:
    op.drop_index(op.f('ix_artworks_global_display_order'), table_name='artworks')
    op.drop_index(op.f('ix_artworks_artist_display_order'), table_name='artworks')

    op.drop_column('artworks', 'global_display_order')
    op.drop_column('artworks', 'artist_display_order')
