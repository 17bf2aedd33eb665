# Supabase tables: user_roles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Identities live in auth.users, managed by Supabase Auth

"""
Expected Supabase table structure:

user_roles:
- id: uuid (primary key)
- user_id: uuid (not null, references auth.users.id)
- role: app_role enum ('admin', 'viewer') (not null)
- created_at: timestamp (default: now())
- unique constraint on (user_id, role)

Database function:
- is_admin(_user_id uuid) returns boolean
  true when user_roles holds (_user_id, 'admin')

Creating accounts, listing identities and password reset use the Auth admin
API and therefore need SUPABASE_SERVICE_ROLE_KEY.
"""
