"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

USER_OWNED_TABLES = (
    'transactions',
    'budgets',
    'savings_goals',
    'habits',
    'tasks',
    'notes',
    'pomodoro_sessions',
    'ai_interactions',
)

ENUM_TYPES = (
    'transaction_type_enum',
    'recurring_frequency_enum',
    'budget_period_enum',
    'habit_type_enum',
    'habit_frequency_enum',
    'pomodoro_type_enum',
    'ai_interaction_type_enum',
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _owned() -> list[sa.Column]:
    return [
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('mobile', sa.String(length=50), server_default='', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'transactions',
        *_owned(),
        sa.Column('type', sa.Enum('income', 'expense', name='transaction_type_enum'), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), server_default='', nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('is_recurring', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            'recurring_frequency',
            sa.Enum('none', 'daily', 'weekly', 'monthly', 'yearly', name='recurring_frequency_enum'),
            server_default='none',
            nullable=False,
        ),
        sa.Column('source', sa.String(length=255), server_default='', nullable=False),
        *_timestamps(),
        sa.CheckConstraint('amount >= 0', name='ck_transactions_amount_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_date', 'transactions', ['date'])

    op.create_table(
        'budgets',
        *_owned(),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'period',
            sa.Enum('weekly', 'monthly', 'yearly', name='budget_period_enum'),
            server_default='monthly',
            nullable=False,
        ),
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'savings_goals',
        *_owned(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('target_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('target_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'habits',
        *_owned(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.String(length=1000), server_default='', nullable=False),
        sa.Column('type', sa.Enum('positive', 'negative', name='habit_type_enum'), nullable=False),
        sa.Column(
            'frequency',
            sa.Enum('daily', 'weekly', 'monthly', name='habit_frequency_enum'),
            server_default='daily',
            nullable=False,
        ),
        sa.Column('goal', sa.String(length=255), server_default='', nullable=False),
        sa.Column('streak', sa.Integer(), server_default='0', nullable=False),
        sa.Column('completed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('completion_dates', sa.JSON(), nullable=False),
        sa.Column('reminder_enabled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('reminder_time', sa.String(length=5), server_default='09:00', nullable=False),
        sa.Column('version', sa.Integer(), server_default='1', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'tasks',
        *_owned(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'notes',
        *_owned(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'pomodoro_sessions',
        *_owned(),
        sa.Column(
            'type',
            sa.Enum('work', 'shortBreak', 'longBreak', name='pomodoro_type_enum'),
            nullable=False,
        ),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('tasks', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pomodoro_sessions_completed_at', 'pomodoro_sessions', ['completed_at'])

    op.create_table(
        'ai_interactions',
        *_owned(),
        sa.Column(
            'type',
            sa.Enum('recommendation', 'analysis', 'motivation', 'pattern', name='ai_interaction_type_enum'),
            nullable=False,
        ),
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('response', sa.Text(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    for table in USER_OWNED_TABLES:
        op.create_index(f'ix_{table}_user_id', table, ['user_id'])


def downgrade() -> None:
    for table in USER_OWNED_TABLES:
        op.drop_index(f'ix_{table}_user_id', table_name=table)
    op.drop_index('ix_pomodoro_sessions_completed_at', table_name='pomodoro_sessions')
    op.drop_index('ix_transactions_date', table_name='transactions')
    for table in reversed(USER_OWNED_TABLES):
        op.drop_table(table)
    op.drop_table('users')
    for enum_name in ENUM_TYPES:
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
