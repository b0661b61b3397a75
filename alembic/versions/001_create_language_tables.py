"""Create locale, language and locale_translation tables

Revision ID: 001_create_language_tables
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_language_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create locale table
    op.create_table(
        'locale',
        sa.Column('id', sa.LargeBinary(length=16), nullable=False),
        sa.Column('code', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code', name='uniq_locale_code')
    )
    
    # Create language table
    op.create_table(
        'language',
        sa.Column('id', sa.LargeBinary(length=16), nullable=False),
        sa.Column('parent_id', sa.LargeBinary(length=16), nullable=True),
        sa.Column('locale_id', sa.LargeBinary(length=16), nullable=False),
        sa.Column('translation_code_id', sa.LargeBinary(length=16), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['parent_id'], ['language.id'], name='fk.language.parent_id'),
        sa.ForeignKeyConstraint(['locale_id'], ['locale.id'], name='fk.language.locale_id'),
        sa.ForeignKeyConstraint(['translation_code_id'], ['locale.id'], name='fk.language.translation_code_id'),
        sa.PrimaryKeyConstraint('id')
    )
    
    # Create locale_translation table, keyed by (locale_id, language_id)
    op.create_table(
        'locale_translation',
        sa.Column('locale_id', sa.LargeBinary(length=16), nullable=False),
        sa.Column('language_id', sa.LargeBinary(length=16), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('territory', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['locale_id'], ['locale.id'], name='fk.locale_translation.locale_id'),
        sa.ForeignKeyConstraint(['language_id'], ['language.id'], name='fk.locale_translation.language_id'),
        sa.PrimaryKeyConstraint('locale_id', 'language_id')
    )


def downgrade() -> None:
    op.drop_table('locale_translation')
    op.drop_table('language')
    op.drop_table('locale')
