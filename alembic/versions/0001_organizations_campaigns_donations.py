from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
    DO $$
    BEGIN
      IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = 'payment_status') THEN
        CREATE TYPE payment_status AS ENUM ('pending','confirmed','failed');
      END IF;
    END$$;

    CREATE TABLE IF NOT EXISTS organizations (
      id SERIAL PRIMARY KEY,
      name TEXT NOT NULL,
      logo_url TEXT NULL,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    );

    -- no ON DELETE CASCADE: an organization with campaigns cannot be removed
    CREATE TABLE IF NOT EXISTS campaigns (
      id SERIAL PRIMARY KEY,
      name TEXT NOT NULL,
      description TEXT NULL,
      target_amount NUMERIC(15,2) NOT NULL CHECK (target_amount > 0),
      current_amount NUMERIC(15,2) NOT NULL DEFAULT 0,
      organization_id INTEGER NOT NULL REFERENCES organizations(id),
      is_active BOOLEAN NOT NULL DEFAULT TRUE,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    );

    CREATE INDEX IF NOT EXISTS ix_campaigns_organization_id ON campaigns(organization_id);

    CREATE TABLE IF NOT EXISTS donations (
      id SERIAL PRIMARY KEY,
      campaign_id INTEGER NOT NULL REFERENCES campaigns(id),
      donor_name TEXT NOT NULL,
      donor_email TEXT NULL,
      donor_phone TEXT NULL,
      amount NUMERIC(15,2) NOT NULL CHECK (amount > 0),
      message TEXT NULL,
      payment_status payment_status NOT NULL DEFAULT 'pending',
      payment_proof_url TEXT NULL,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      confirmed_at TIMESTAMPTZ NULL,
      CONSTRAINT ck_donations_confirmed_at CHECK (
        (payment_status = 'confirmed') = (confirmed_at IS NOT NULL)
      )
    );

    CREATE INDEX IF NOT EXISTS idx_donations_campaign  ON donations(campaign_id, created_at);
    CREATE INDEX IF NOT EXISTS idx_donations_confirmed ON donations(campaign_id, confirmed_at);
    """
    )


def downgrade():
    op.execute(
        """
    DROP TABLE IF EXISTS donations;
    DROP TABLE IF EXISTS campaigns;
    DROP TABLE IF EXISTS organizations;
    DO $$
    BEGIN
      IF EXISTS (SELECT 1 FROM pg_type WHERE typname = 'payment_status') THEN
        DROP TYPE payment_status;
      END IF;
    END$$;
    """
    )
