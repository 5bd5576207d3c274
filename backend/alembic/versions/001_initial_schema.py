"""Initial onboarding schema: OTP codes, passkeys, OAuth tokens, registries

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('otp_codes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('code', sa.String(6), nullable=False),
        sa.Column('flow_token', sa.String(36), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('flow_token'),
    )
    op.create_index('ix_otp_codes_phone', 'otp_codes', ['phone'])
    op.create_index('idx_otp_codes_phone_used', 'otp_codes', ['phone', 'used'])

    op.create_table('passkeys',
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('credential_id', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('phone'),
    )

    op.create_table('oauth_tokens',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('credential_id', sa.String(), nullable=False),
        sa.Column('access_token', sa.String(64), nullable=False),
        sa.Column('refresh_token', sa.String(64), nullable=False),
        sa.Column('issued_at', sa.DateTime(), nullable=False),
        sa.Column('expires_in', sa.Integer(), nullable=False),
        sa.Column('revoked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('access_token'),
        sa.UniqueConstraint('refresh_token'),
    )
    op.create_index('idx_oauth_tokens_phone_issued', 'oauth_tokens', ['phone', 'issued_at'])

    op.create_table('applications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('mtp_servers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('url', sa.String(512), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade():
    op.drop_table('mtp_servers')
    op.drop_table('applications')
    op.drop_index('idx_oauth_tokens_phone_issued', 'oauth_tokens')
    op.drop_table('oauth_tokens')
    op.drop_table('passkeys')
    op.drop_index('idx_otp_codes_phone_used', 'otp_codes')
    op.drop_index('ix_otp_codes_phone', 'otp_codes')
    op.drop_table('otp_codes')
