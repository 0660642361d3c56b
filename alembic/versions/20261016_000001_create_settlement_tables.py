"""Create users, purchases, rewards and balances tables

Revision ID: 20261016_000001
Revises: 
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261016_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('referrer_id', sa.BigInteger(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['referrer_id'], ['users.id'], name='fk_users_referrer_id_users', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_users')
    )
    op.create_index('ix_users_referrer_id', 'users', ['referrer_id'])

    op.create_table(
        'purchases',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('amount >= 0', name='ck_purchases_amount_non_negative'),
        sa.CheckConstraint(
            "status IN ('authorized', 'captured', 'refunded', 'voided')",
            name='ck_purchases_status_valid',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_purchases_user_id_users', ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name='pk_purchases')
    )
    op.create_index('ix_purchases_user_id', 'purchases', ['user_id'])

    op.create_table(
        'rewards',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('purchase_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('beneficiary_user_id', sa.BigInteger(), nullable=False),
        sa.Column('level', sa.SmallInteger(), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('level IN (1, 2)', name='ck_rewards_level_valid'),
        sa.CheckConstraint('amount > 0', name='ck_rewards_amount_positive'),
        sa.ForeignKeyConstraint(['purchase_id'], ['purchases.id'], name='fk_rewards_purchase_id_purchases', ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['beneficiary_user_id'], ['users.id'], name='fk_rewards_beneficiary_user_id_users', ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name='pk_rewards'),
        sa.UniqueConstraint(
            'purchase_id', 'beneficiary_user_id', 'level',
            name='uq_rewards_purchase_beneficiary_level',
        )
    )
    op.create_index('ix_rewards_beneficiary_user_id', 'rewards', ['beneficiary_user_id'])

    op.create_table(
        'balances',
        sa.Column('user_id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('balance', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('balance >= 0', name='ck_balances_balance_non_negative'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_balances_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', name='pk_balances')
    )


def downgrade() -> None:
    op.drop_table('balances')

    op.drop_index('ix_rewards_beneficiary_user_id', 'rewards')
    op.drop_table('rewards')

    op.drop_index('ix_purchases_user_id', 'purchases')
    op.drop_table('purchases')

    op.drop_index('ix_users_referrer_id', 'users')
    op.drop_table('users')
