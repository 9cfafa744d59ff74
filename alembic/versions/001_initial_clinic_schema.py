"""Initial clinic schema: pet types, owners, pets and visits

Revision ID: 001
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns():
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Create types table
    op.create_table('types',
        *_audit_columns(),
        sa.Column('name', sa.String(length=80), nullable=False, comment="Display name of the pet type, e.g. 'dog'"),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_types')),
        sa.UniqueConstraint('name', name=op.f('uq_types_name')),
    )

    # Create owners table
    op.create_table('owners',
        *_audit_columns(),
        sa.Column('first_name', sa.String(length=30), nullable=False, comment="Owner's first name"),
        sa.Column('last_name', sa.String(length=30), nullable=False, comment="Owner's last name"),
        sa.Column('address', sa.String(length=255), nullable=False, comment='Street address'),
        sa.Column('city', sa.String(length=80), nullable=False, comment='City'),
        sa.Column('telephone', sa.String(length=20), nullable=False, comment='Contact phone number'),
        sa.Column('version', sa.Integer(), nullable=False, comment='Optimistic-lock counter'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_owners')),
    )
    op.create_index(op.f('ix_owners_last_name'), 'owners', ['last_name'], unique=False)

    # Create pets table
    op.create_table('pets',
        *_audit_columns(),
        sa.Column('owner_id', sa.Integer(), nullable=False, comment='Owner this pet belongs to'),
        sa.Column('name', sa.String(length=30), nullable=False, comment="Pet's name"),
        sa.Column('birth_date', sa.Date(), nullable=True, comment="Pet's date of birth"),
        sa.Column('type_id', sa.Integer(), nullable=True, comment='Reference to the shared pet type catalog'),
        sa.CheckConstraint('length(name) > 0', name=op.f('ck_pets_name_not_empty')),
        sa.ForeignKeyConstraint(['owner_id'], ['owners.id'], name=op.f('fk_pets_owner_id_owners'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['type_id'], ['types.id'], name=op.f('fk_pets_type_id_types')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pets')),
    )
    op.create_index(op.f('ix_pets_owner_id'), 'pets', ['owner_id'], unique=False)
    op.create_index('ix_pets_owner_name', 'pets', ['owner_id', 'name'], unique=False)

    # Create visits table
    op.create_table('visits',
        *_audit_columns(),
        sa.Column('pet_id', sa.Integer(), nullable=False, comment='Pet this visit belongs to'),
        sa.Column('visit_date', sa.Date(), nullable=False, comment='Day of the visit'),
        sa.Column('description', sa.Text(), nullable=False, comment='Free-text notes, stored exactly as entered'),
        sa.CheckConstraint('length(trim(description)) > 0', name=op.f('ck_visits_description_not_blank')),
        sa.ForeignKeyConstraint(['pet_id'], ['pets.id'], name=op.f('fk_visits_pet_id_pets'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_visits')),
    )
    op.create_index(op.f('ix_visits_pet_id'), 'visits', ['pet_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_visits_pet_id'), table_name='visits')
    op.drop_table('visits')
    op.drop_index('ix_pets_owner_name', table_name='pets')
    op.drop_index(op.f('ix_pets_owner_id'), table_name='pets')
    op.drop_table('pets')
    op.drop_index(op.f('ix_owners_last_name'), table_name='owners')
    op.drop_table('owners')
    op.drop_table('types')
