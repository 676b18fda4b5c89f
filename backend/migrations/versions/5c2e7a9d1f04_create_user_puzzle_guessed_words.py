"""create user, puzzle and guessed_words tables

Revision ID: 5c2e7a9d1f04
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e7a9d1f04'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'puzzle' not in existing_tables:
        op.create_table(
            'puzzle',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('letters', sa.String(length=7), nullable=False),
            sa.Column('center', sa.String(length=1), nullable=False),
            sa.Column('wordlist', sa.Text(), nullable=False),
            sa.Column('total', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index('ix_puzzle_letters', 'puzzle', ['letters'], unique=True)

    if 'guessed_words' not in existing_tables:
        op.create_table(
            'guessed_words',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('owner', sa.String(length=64), nullable=False),
            sa.Column('storage_key', sa.String(length=32), nullable=False),
            sa.Column('words', sa.Text(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
            sa.UniqueConstraint('owner', 'storage_key', name='uq_guessed_words_owner_key'),
        )
        op.create_index('ix_guessed_words_owner', 'guessed_words', ['owner'], unique=False)


def downgrade():
    op.drop_index('ix_guessed_words_owner', table_name='guessed_words')
    op.drop_table('guessed_words')
    op.drop_index('ix_puzzle_letters', table_name='puzzle')
    op.drop_table('puzzle')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
