"""Create quiz, question and attempt tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2025-11-03 10:12:44.201337

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '3f9a1c2b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('time_limit_seconds', sa.Integer(), nullable=True),
            sa.Column('is_published', sa.Boolean(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_is_published', 'quizzes', ['is_published'], unique=False)
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)

    if 'questions' not in tables:
        op.create_table('questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('type', sa.String(length=16), nullable=False),
            sa.Column('prompt', sa.Text(), nullable=False),
            sa.Column('options', sa.JSON(), nullable=True),
            sa.Column('correct_answer', sa.Text(), nullable=True),
            sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_questions_quiz_id', 'questions', ['quiz_id'], unique=False)
        op.create_index('ix_questions_quiz_position', 'questions', ['quiz_id', 'position'], unique=False)

    if 'attempts' not in tables:
        op.create_table('attempts',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('started_at', sa.DateTime(), nullable=False),
            sa.Column('submitted_at', sa.DateTime(), nullable=True),
            sa.Column('score', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_attempts_quiz_id', 'attempts', ['quiz_id'], unique=False)

    if 'attempt_answers' not in tables:
        op.create_table('attempt_answers',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('attempt_id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.Integer(), nullable=False),
            sa.Column('value', sa.Text(), nullable=False),
            sa.Column('answered_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['attempt_id'], ['attempts.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('attempt_id', 'question_id', name='uq_attempt_question')
        )
        op.create_index('ix_attempt_answers_attempt_id', 'attempt_answers', ['attempt_id'], unique=False)
        op.create_index('ix_attempt_answers_question_id', 'attempt_answers', ['question_id'], unique=False)

    if 'attempt_events' not in tables:
        op.create_table('attempt_events',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('attempt_id', sa.Integer(), nullable=False),
            sa.Column('event', sa.String(length=255), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['attempt_id'], ['attempts.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_attempt_events_attempt_id', 'attempt_events', ['attempt_id'], unique=False)


def downgrade():
    op.drop_index('ix_attempt_events_attempt_id', table_name='attempt_events')
    op.drop_table('attempt_events')

    op.drop_index('ix_attempt_answers_question_id', table_name='attempt_answers')
    op.drop_index('ix_attempt_answers_attempt_id', table_name='attempt_answers')
    op.drop_table('attempt_answers')

    op.drop_index('ix_attempts_quiz_id', table_name='attempts')
    op.drop_table('attempts')

    op.drop_index('ix_questions_quiz_position', table_name='questions')
    op.drop_index('ix_questions_quiz_id', table_name='questions')
    op.drop_table('questions')

    op.drop_index('ix_quizzes_created_at', table_name='quizzes')
    op.drop_index('ix_quizzes_is_published', table_name='quizzes')
    op.drop_table('quizzes')
