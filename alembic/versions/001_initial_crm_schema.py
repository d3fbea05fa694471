"""Initial CRM schema with RLS policies

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op

from recruit_crm.core.config import settings

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

ROLE = settings.rls_role

ORG_SCOPED_TABLES = ("profiles", "candidates", "activities", "tags", "templates")
TIMESTAMPED_TABLES = ("organizations", "profiles", "candidates", "templates")
ALL_TABLES = ("organizations",) + ORG_SCOPED_TABLES + ("candidate_tags",)

# Grants mirror the policy matrix; anything not granted is denied.
GRANTS = {
    "organizations": "SELECT",
    "profiles": "SELECT",
    "candidates": "SELECT, INSERT, UPDATE",
    "activities": "SELECT, INSERT",
    "tags": "SELECT, INSERT, UPDATE, DELETE",
    "candidate_tags": "SELECT, INSERT, DELETE",
    "templates": "SELECT, INSERT, UPDATE, DELETE",
}

SAME_ORG = "organization_id = current_organization_id()"
CANDIDATE_IN_ORG = (
    "EXISTS (SELECT 1 FROM candidates c "
    "WHERE c.id = candidate_tags.candidate_id AND c.organization_id = current_organization_id())"
)
TAG_IN_ORG = (
    "EXISTS (SELECT 1 FROM tags t "
    "WHERE t.id = candidate_tags.tag_id AND t.organization_id = current_organization_id())"
)

POLICIES = [
    ("organizations_select", "organizations", "SELECT", "id = current_organization_id()", None),
    ("profiles_select", "profiles", "SELECT", SAME_ORG, None),
    ("candidates_select", "candidates", "SELECT", SAME_ORG, None),
    ("candidates_insert", "candidates", "INSERT", None, SAME_ORG),
    ("candidates_update", "candidates", "UPDATE", SAME_ORG, SAME_ORG),
    ("activities_select", "activities", "SELECT", SAME_ORG, None),
    ("activities_insert", "activities", "INSERT", None, SAME_ORG),
    ("tags_all", "tags", "ALL", SAME_ORG, SAME_ORG),
    ("candidate_tags_select", "candidate_tags", "SELECT", CANDIDATE_IN_ORG, None),
    ("candidate_tags_insert", "candidate_tags", "INSERT", None, f"{CANDIDATE_IN_ORG} AND {TAG_IN_ORG}"),
    ("candidate_tags_delete", "candidate_tags", "DELETE", CANDIDATE_IN_ORG, None),
    ("templates_all", "templates", "ALL", SAME_ORG, SAME_ORG),
]


def upgrade() -> None:
    """Create tables, timestamp triggers and organization isolation policies."""

    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")

    op.execute("""
        CREATE TABLE organizations (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(255) NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            updated_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc')
        );
    """)

    op.execute("""
        CREATE TABLE profiles (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            organization_id UUID REFERENCES organizations(id),
            email VARCHAR(255) NOT NULL UNIQUE,
            hashed_password VARCHAR(255) NOT NULL,
            first_name VARCHAR(255),
            last_name VARCHAR(255),
            role VARCHAR(50),
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            updated_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc')
        );
    """)

    op.execute("""
        CREATE TABLE candidates (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            organization_id UUID REFERENCES organizations(id),
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            personal_email TEXT,
            work_email TEXT,
            phone TEXT,
            linkedin_url TEXT,
            github_url TEXT,
            other_social_urls JSONB,
            resume_url TEXT,
            relationship_type VARCHAR(20),
            functional_role TEXT,
            current_location JSONB,
            current_job_title TEXT,
            past_job_titles TEXT[],
            current_industry TEXT,
            past_industries TEXT[],
            tech_stack TEXT[],
            current_company TEXT,
            past_companies TEXT[],
            current_company_size TEXT,
            past_company_sizes TEXT[],
            schools JSONB,
            compensation_expectations JSONB,
            must_haves TEXT[],
            workplace_preferences JSONB,
            urgency_level TEXT,
            is_active_looking BOOLEAN NOT NULL DEFAULT FALSE,
            motivation_factors TEXT[],
            employment_status TEXT,
            visa_requirements JSONB,
            nurturing_info JSONB,
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            updated_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            created_by UUID REFERENCES profiles(id),
            updated_by UUID REFERENCES profiles(id),
            CONSTRAINT ck_candidates_relationship_type
                CHECK (relationship_type IN ('candidate', 'client', 'both'))
        );
    """)

    op.execute("""
        CREATE TABLE activities (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            candidate_id UUID REFERENCES candidates(id),
            organization_id UUID REFERENCES organizations(id),
            type TEXT NOT NULL,
            description TEXT,
            metadata JSONB,
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            created_by UUID REFERENCES profiles(id)
        );
    """)

    op.execute("""
        CREATE TABLE tags (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            organization_id UUID REFERENCES organizations(id),
            name TEXT NOT NULL,
            color TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            created_by UUID REFERENCES profiles(id)
        );
    """)

    # No ON DELETE CASCADE: referenced candidates and tags cannot be removed.
    op.execute("""
        CREATE TABLE candidate_tags (
            candidate_id UUID NOT NULL REFERENCES candidates(id),
            tag_id UUID NOT NULL REFERENCES tags(id),
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            created_by UUID REFERENCES profiles(id),
            PRIMARY KEY (candidate_id, tag_id)
        );
    """)

    op.execute("""
        CREATE TABLE templates (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            organization_id UUID REFERENCES organizations(id),
            name TEXT NOT NULL,
            type TEXT NOT NULL,
            content TEXT NOT NULL,
            variables JSONB,
            created_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            updated_at TIMESTAMP NOT NULL DEFAULT (NOW() AT TIME ZONE 'utc'),
            created_by UUID REFERENCES profiles(id),
            updated_by UUID REFERENCES profiles(id)
        );
    """)

    # Indexes for organization scoping and search
    op.create_index('ix_profiles_organization_id', 'profiles', ['organization_id'])
    op.create_index('ix_profiles_email', 'profiles', ['email'])
    op.create_index('ix_candidates_organization_id', 'candidates', ['organization_id'])
    op.create_index('ix_candidates_updated_at', 'candidates', ['updated_at'])
    op.create_index('ix_activities_organization_id', 'activities', ['organization_id'])
    op.create_index('ix_activities_candidate_id', 'activities', ['candidate_id'])
    op.create_index('ix_tags_organization_id', 'tags', ['organization_id'])
    op.create_index('ix_candidate_tags_candidate_id', 'candidate_tags', ['candidate_id'])
    op.create_index('ix_templates_organization_id', 'templates', ['organization_id'])

    # updated_at always moves forward on UPDATE; created_at never changes
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = GREATEST(NOW() AT TIME ZONE 'utc', OLD.updated_at);
            NEW.created_at = OLD.created_at;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    for table in TIMESTAMPED_TABLES:
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW
                EXECUTE FUNCTION update_updated_at_column();
        """)

    # Caller organization, resolved from the user id published per transaction.
    # SECURITY DEFINER so the lookup is not itself filtered by the profiles policy.
    op.execute("""
        CREATE OR REPLACE FUNCTION current_organization_id()
        RETURNS UUID AS $$
            SELECT organization_id FROM profiles
            WHERE id = NULLIF(current_setting('app.current_user_id', true), '')::UUID
        $$ LANGUAGE sql STABLE SECURITY DEFINER;
    """)

    op.execute(f"""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_roles WHERE rolname = '{ROLE}') THEN
                CREATE ROLE {ROLE} NOLOGIN;
            END IF;
        END
        $$;
    """)
    op.execute(f"GRANT {ROLE} TO CURRENT_USER;")
    op.execute(f"GRANT EXECUTE ON FUNCTION current_organization_id() TO {ROLE};")

    for table, privileges in GRANTS.items():
        op.execute(f"GRANT {privileges} ON {table} TO {ROLE};")

    # Enable Row Level Security on every table
    for table in ALL_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    for name, table, command, using, check in POLICIES:
        clauses = ""
        if using:
            clauses += f"\n            USING ({using})"
        if check:
            clauses += f"\n            WITH CHECK ({check})"
        op.execute(f"""
            CREATE POLICY {name} ON {table}
            FOR {command} TO {ROLE}{clauses};
        """)


def downgrade() -> None:
    """Drop all tables, policies and functions."""

    for name, table, _, _, _ in POLICIES:
        op.execute(f"DROP POLICY IF EXISTS {name} ON {table};")

    for table in ALL_TABLES:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
        op.execute(f"REVOKE ALL ON {table} FROM {ROLE};")

    op.execute("DROP FUNCTION IF EXISTS current_organization_id();")

    for table in TIMESTAMPED_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table};")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column();")

    op.execute("DROP TABLE IF EXISTS templates;")
    op.execute("DROP TABLE IF EXISTS candidate_tags;")
    op.execute("DROP TABLE IF EXISTS tags;")
    op.execute("DROP TABLE IF EXISTS activities;")
    op.execute("DROP TABLE IF EXISTS candidates;")
    op.execute("DROP TABLE IF EXISTS profiles;")
    op.execute("DROP TABLE IF EXISTS organizations;")
