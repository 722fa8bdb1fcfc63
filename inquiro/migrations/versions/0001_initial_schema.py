"""Initial schema: users, surveys, questions, responses and tokens

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

from inquiro.migrations.util import get_uuid_type

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    uuid_type = get_uuid_type()

    op.create_table(
        'users',
        sa.Column('user_id', uuid_type, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_login_date', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('user_id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )

    op.create_table(
        'refresh_tokens',
        sa.Column('token_id', uuid_type, nullable=False),
        sa.Column('user_id', uuid_type, nullable=False),
        sa.Column('token_hash', sa.String(255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('token_id'),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])
    op.create_index('ix_refresh_tokens_token_hash', 'refresh_tokens', ['token_hash'])

    op.create_table(
        'surveys',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('allow_anonymous', sa.Boolean(), nullable=False),
        sa.Column('max_responses', sa.Integer(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('response_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('creator_id', uuid_type, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['creator_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_surveys_status', 'surveys', ['status'])
    op.create_index('ix_surveys_creator_id', 'surveys', ['creator_id'])
    op.create_index('ix_surveys_public_listing', 'surveys', ['status', 'is_public'])

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(32), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('survey_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['survey_id'], ['surveys.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_questions_survey_id', 'questions', ['survey_id'])

    op.create_table(
        'question_options',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('text', sa.String(500), nullable=False),
        sa.Column('value', sa.String(255), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_question_options_question_id', 'question_options', ['question_id'])

    op.create_table(
        'survey_tokens',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('token', sa.String(128), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('max_uses', sa.Integer(), nullable=True),
        sa.Column('current_uses', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('survey_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['survey_id'], ['surveys.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_survey_tokens_token', 'survey_tokens', ['token'], unique=True)
    op.create_index('ix_survey_tokens_survey_id', 'survey_tokens', ['survey_id'])

    op.create_table(
        'survey_responses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False),
        sa.Column('ip_address', sa.String(64), nullable=True),
        sa.Column('user_agent', sa.String(512), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('survey_id', sa.Integer(), nullable=False),
        sa.Column('respondent_id', uuid_type, nullable=True),
        sa.Column('token_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['survey_id'], ['surveys.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['respondent_id'], ['users.user_id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['token_id'], ['survey_tokens.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_survey_responses_survey_id', 'survey_responses', ['survey_id'])
    op.create_index('ix_survey_responses_respondent_id', 'survey_responses', ['respondent_id'])
    op.create_index(
        'ix_survey_responses_survey_respondent', 'survey_responses', ['survey_id', 'respondent_id']
    )

    op.create_table(
        'response_answers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('text_value', sa.Text(), nullable=True),
        sa.Column('number_value', sa.Float(), nullable=True),
        sa.Column('date_value', sa.DateTime(timezone=True), nullable=True),
        sa.Column('boolean_value', sa.Boolean(), nullable=True),
        sa.Column('selected_option_id', sa.Integer(), nullable=True),
        sa.Column('response_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['selected_option_id'], ['question_options.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['response_id'], ['survey_responses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_response_answers_response_id', 'response_answers', ['response_id'])
    op.create_index('ix_response_answers_question_id', 'response_answers', ['question_id'])


def downgrade() -> None:
    op.drop_index('ix_response_answers_question_id', table_name='response_answers')
    op.drop_index('ix_response_answers_response_id', table_name='response_answers')
    op.drop_table('response_answers')

    op.drop_index('ix_survey_responses_survey_respondent', table_name='survey_responses')
    op.drop_index('ix_survey_responses_respondent_id', table_name='survey_responses')
    op.drop_index('ix_survey_responses_survey_id', table_name='survey_responses')
    op.drop_table('survey_responses')

    op.drop_index('ix_survey_tokens_survey_id', table_name='survey_tokens')
    op.drop_index('ix_survey_tokens_token', table_name='survey_tokens')
    op.drop_table('survey_tokens')

    op.drop_index('ix_question_options_question_id', table_name='question_options')
    op.drop_table('question_options')

    op.drop_index('ix_questions_survey_id', table_name='questions')
    op.drop_table('questions')

    op.drop_index('ix_surveys_public_listing', table_name='surveys')
    op.drop_index('ix_surveys_creator_id', table_name='surveys')
    op.drop_index('ix_surveys_status', table_name='surveys')
    op.drop_table('surveys')

    op.drop_index('ix_refresh_tokens_token_hash', table_name='refresh_tokens')
    op.drop_index('ix_refresh_tokens_user_id', table_name='refresh_tokens')
    op.drop_table('refresh_tokens')

    op.drop_table('users')
