# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Accounts (auth.users table), created by admins through manage-users
# - Password sign-in and session management
# - JWT token generation and validation
# - Password reset emails

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.admin.sign_out() - Revoke the session behind a JWT

Roles live outside auth.users, in public.user_roles (see modules/users/models.py).
"""
