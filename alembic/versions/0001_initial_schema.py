"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:12:40.218331

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

participant_type = sa.Enum('subject', 'evaluator', name='participanttype')
assignment_status = sa.Enum('pending', 'completed', name='assignmentstatus')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('department', sa.String(), nullable=False),
        sa.Column('job_title', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'forms',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('allow_late_submissions', sa.Boolean(), nullable=False),
        sa.Column('allow_multiple_responses', sa.Boolean(), nullable=False),
        sa.Column('notify_on_completion', sa.Boolean(), nullable=False),
        sa.Column('form_type', sa.String(length=20), nullable=False),
        sa.Column('subject_matrix', sa.JSON(), nullable=False),
        sa.Column('questions', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_forms_id', 'forms', ['id'])
    op.create_index('idx_forms_creator_created', 'forms', ['created_by', 'created_at'])

    op.create_table(
        'enhanced_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('participant_type', participant_type, nullable=False),
        sa.Column('participant_id', sa.Integer(), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=True),
        sa.Column('participant_email', sa.String(), nullable=True),
        sa.Column('subject_id', sa.Integer(), nullable=True),
        sa.Column('subject_name', sa.String(), nullable=True),
        sa.Column('subject_email', sa.String(), nullable=True),
        sa.Column('evaluator_position', sa.Integer(), nullable=True),
        sa.Column('assigned_questions', sa.JSON(), nullable=False),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('status', assignment_status, nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['form_id'], ['forms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_enhanced_assignments_id', 'enhanced_assignments', ['id'])
    op.create_index('ix_enhanced_assignments_form_id', 'enhanced_assignments', ['form_id'])
    op.create_index('ix_enhanced_assignments_token', 'enhanced_assignments', ['token'], unique=True)
    op.create_index('idx_assignments_form_participant', 'enhanced_assignments', ['form_id', 'participant_id'])

    op.create_table(
        'enhanced_responses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('assignment_id', sa.Integer(), nullable=False),
        sa.Column('participant_type', sa.String(length=20), nullable=False),
        sa.Column('participant_id', sa.Integer(), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=True),
        sa.Column('participant_email', sa.String(), nullable=True),
        sa.Column('evaluator_position', sa.Integer(), nullable=True),
        sa.Column('subject_id', sa.Integer(), nullable=True),
        sa.Column('subject_name', sa.String(), nullable=True),
        sa.Column('subject_email', sa.String(), nullable=True),
        sa.Column('responses', sa.JSON(), nullable=False),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['form_id'], ['forms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assignment_id'], ['enhanced_assignments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('assignment_id', name='uq_responses_assignment'),
    )
    op.create_index('ix_enhanced_responses_id', 'enhanced_responses', ['id'])
    op.create_index('ix_enhanced_responses_form_id', 'enhanced_responses', ['form_id'])
    op.create_index(
        'idx_responses_assignment_participant', 'enhanced_responses', ['assignment_id', 'participant_id']
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('assignment_id', sa.Integer(), nullable=True),
        sa.Column('form_id', sa.Integer(), nullable=True),
        sa.Column('token', sa.String(length=64), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['assignment_id'], ['enhanced_assignments.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['form_id'], ['forms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_form_id', 'notifications', ['form_id'])
    op.create_index('idx_notifications_user_read_created', 'notifications', ['user_id', 'read', 'created_at'])


def downgrade() -> None:
    op.drop_index('idx_notifications_user_read_created', table_name='notifications')
    op.drop_index('ix_notifications_form_id', table_name='notifications')
    op.drop_index('ix_notifications_id', table_name='notifications')
    op.drop_table('notifications')

    op.drop_index('idx_responses_assignment_participant', table_name='enhanced_responses')
    op.drop_index('ix_enhanced_responses_form_id', table_name='enhanced_responses')
    op.drop_index('ix_enhanced_responses_id', table_name='enhanced_responses')
    op.drop_table('enhanced_responses')

    op.drop_index('idx_assignments_form_participant', table_name='enhanced_assignments')
    op.drop_index('ix_enhanced_assignments_token', table_name='enhanced_assignments')
    op.drop_index('ix_enhanced_assignments_form_id', table_name='enhanced_assignments')
    op.drop_index('ix_enhanced_assignments_id', table_name='enhanced_assignments')
    op.drop_table('enhanced_assignments')
    assignment_status.drop(op.get_bind(), checkfirst=True)
    participant_type.drop(op.get_bind(), checkfirst=True)

    op.drop_index('idx_forms_creator_created', table_name='forms')
    op.drop_index('ix_forms_id', table_name='forms')
    op.drop_table('forms')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
