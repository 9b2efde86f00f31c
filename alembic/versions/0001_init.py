"""initial

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('clothing_item',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('type', sa.String(length=64), nullable=True),
        sa.Column('color', sa.String(length=64), nullable=True),
        sa.Column('material', sa.String(length=128), nullable=True),
        sa.Column('season_tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('occasion_tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('favorite', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('times_worn', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('last_worn_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_clothing_item_user_id', 'clothing_item', ['user_id'])

    op.create_table('outfit',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('item_ids', postgresql.ARRAY(sa.String(length=36)), nullable=True),
        sa.Column('season_tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('occasion_tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('favorite', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('times_worn', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('last_worn_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('source', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_outfit_user_id', 'outfit', ['user_id'])

    op.create_table('outfit_log',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('outfit_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('outfit.id', ondelete='CASCADE'), nullable=False),
        sa.Column('worn_date', sa.Date(), nullable=False),
        sa.Column('time_of_day', sa.String(length=16), nullable=True),
        sa.Column('weather_condition', sa.Text(), nullable=True),
        sa.Column('temperature', sa.Float(), nullable=True),
        sa.Column('activity', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_outfit_log_user_id', 'outfit_log', ['user_id'])

    op.create_table('daily_suggestion',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('suggestion_date', sa.Date(), nullable=False),
        sa.Column('outfit_ids', postgresql.ARRAY(sa.String(length=36)), nullable=False),
        sa.Column('reasoning', sa.Text(), nullable=True),
        sa.Column('weather_context', sa.JSON(), nullable=True),
        sa.Column('used_fallback', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('was_viewed', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('was_accepted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('user_id', 'suggestion_date', name='uq_daily_suggestion_user_date'),
    )

    op.create_table('learning_datum',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('interaction_type', sa.String(length=32), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('feedback_text', sa.Text(), nullable=True),
        sa.Column('outfit_data', sa.JSON(), nullable=True),
        sa.Column('context', sa.JSON(), nullable=True),
        sa.Column('was_successful', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_learning_datum_user_created', 'learning_datum', ['user_id', 'created_at'])

    op.create_table('usage_quota',
        sa.Column('user_id', sa.String(length=64), primary_key=True),
        sa.Column('dimension', sa.String(length=32), primary_key=True),
        sa.Column('window_date', sa.Date(), primary_key=True),
        sa.Column('count', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_table('user_account',
        sa.Column('user_id', sa.String(length=64), primary_key=True),
        sa.Column('first_name', sa.Text(), nullable=True),
        sa.Column('is_premium', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_table('user_preferences',
        sa.Column('user_id', sa.String(length=64), primary_key=True),
        sa.Column('favorite_colors', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('favorite_styles', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('personality_tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('quiz_derived', sa.JSON(), nullable=True),
        sa.Column('preferred_city', sa.Text(), nullable=True),
        sa.Column('preferred_country', sa.Text(), nullable=True),
        sa.Column('reminder_enabled', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_table('fashion_trend',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('trend_name', sa.Text(), nullable=False),
        sa.Column('season', sa.String(length=32), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('colors', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('key_pieces', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('style_tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('popularity_score', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('trend_name', 'season', name='uq_fashion_trend_name_season'),
    )

    op.create_table('smart_reminder',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('reminder_type', sa.String(length=32), nullable=False),
        sa.Column('item_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clothing_item.id', ondelete='CASCADE'), nullable=True),
        sa.Column('outfit_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('outfit.id', ondelete='CASCADE'), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('priority', sa.Integer(), nullable=False, server_default=sa.text('5')),
        sa.Column('dismissed', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_smart_reminder_user_id', 'smart_reminder', ['user_id'])


def downgrade() -> None:
    op.drop_table('smart_reminder')
    op.drop_table('fashion_trend')
    op.drop_table('user_preferences')
    op.drop_table('user_account')
    op.drop_table('usage_quota')
    op.drop_table('learning_datum')
    op.drop_table('daily_suggestion')
    op.drop_table('outfit_log')
    op.drop_table('outfit')
    op.drop_table('clothing_item')
