"""baseline - users, exercises, calorie entries and exercise logs

Revision ID: 3f1c2a9b7d40
Revises:
Create Date: 2026-10-16 10:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('activity_level', sa.String(length=50), nullable=False),
        sa.Column('fitness_goal', sa.String(length=50), nullable=False),
        sa.Column('daily_calorie_goal', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('difficulty_level', sa.String(length=20), nullable=False),
        sa.Column('calories_per_minute', sa.Float(), nullable=True),
        sa.Column('muscle_groups', sa.JSON(), nullable=True),
        sa.Column('equipment_needed', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_exercises_id'), 'exercises', ['id'], unique=False)
    op.create_index(op.f('ix_exercises_category'), 'exercises', ['category'], unique=False)
    op.create_index(op.f('ix_exercises_difficulty_level'), 'exercises', ['difficulty_level'], unique=False)
    op.create_index(op.f('ix_exercises_is_active'), 'exercises', ['is_active'], unique=False)

    op.create_table(
        'calorie_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('food_name', sa.String(length=255), nullable=False),
        sa.Column('brand', sa.String(length=255), nullable=True),
        sa.Column('serving_size', sa.String(length=100), nullable=False),
        sa.Column('calories_per_serving', sa.Integer(), nullable=False),
        sa.Column('servings_consumed', sa.Float(), nullable=False),
        sa.Column('protein_g', sa.Float(), nullable=True),
        sa.Column('carbs_g', sa.Float(), nullable=True),
        sa.Column('fat_g', sa.Float(), nullable=True),
        sa.Column('fiber_g', sa.Float(), nullable=True),
        sa.Column('sugar_g', sa.Float(), nullable=True),
        sa.Column('sodium_mg', sa.Float(), nullable=True),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('consumed_at', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_calorie_entries_id'), 'calorie_entries', ['id'], unique=False)
    op.create_index('ix_calorie_entries_user_consumed', 'calorie_entries', ['user_id', 'consumed_at'], unique=False)

    op.create_table(
        'user_exercises',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('sets', sa.Integer(), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('distance_km', sa.Float(), nullable=True),
        sa.Column('calories_burned', sa.Integer(), nullable=True),
        sa.Column('performed_at', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_exercises_id'), 'user_exercises', ['id'], unique=False)
    op.create_index(op.f('ix_user_exercises_exercise_id'), 'user_exercises', ['exercise_id'], unique=False)
    op.create_index('ix_user_exercises_user_performed', 'user_exercises', ['user_id', 'performed_at'], unique=False)
    op.create_index('ix_user_exercises_user_exercise', 'user_exercises', ['user_id', 'exercise_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_user_exercises_user_exercise', table_name='user_exercises')
    op.drop_index('ix_user_exercises_user_performed', table_name='user_exercises')
    op.drop_index(op.f('ix_user_exercises_exercise_id'), table_name='user_exercises')
    op.drop_index(op.f('ix_user_exercises_id'), table_name='user_exercises')
    op.drop_table('user_exercises')

    op.drop_index('ix_calorie_entries_user_consumed', table_name='calorie_entries')
    op.drop_index(op.f('ix_calorie_entries_id'), table_name='calorie_entries')
    op.drop_table('calorie_entries')

    op.drop_index(op.f('ix_exercises_is_active'), table_name='exercises')
    op.drop_index(op.f('ix_exercises_difficulty_level'), table_name='exercises')
    op.drop_index(op.f('ix_exercises_category'), table_name='exercises')
    op.drop_index(op.f('ix_exercises_id'), table_name='exercises')
    op.drop_table('exercises')

    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
