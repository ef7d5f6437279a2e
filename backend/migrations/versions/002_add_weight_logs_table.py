"""Add weight_logs table

Revision ID: 002
Revises: 001
Create Date: 2025-09-29 10:12:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('weight_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.Column('weight', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('note', sa.String(length=200), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_weight_user_logged_at', 'weight_logs', ['user_id', 'logged_at'], unique=False)
    op.create_index('ix_weight_logs_logged_at', 'weight_logs', ['logged_at'], unique=False)
    op.create_index('ix_weight_logs_status', 'weight_logs', ['status'], unique=False)


def downgrade():
    op.drop_index('ix_weight_logs_status', table_name='weight_logs')
    op.drop_index('ix_weight_logs_logged_at', table_name='weight_logs')
    op.drop_index('idx_weight_user_logged_at', table_name='weight_logs')
    op.drop_table('weight_logs')
