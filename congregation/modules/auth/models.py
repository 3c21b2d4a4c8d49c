# Supabase Auth
# This module uses Supabase's built-in authentication system
# Supabase Auth handles registration, password sign-in, JWT issuance and validation.
# Member details live in the public.profiles table (see modules/profiles/models.py).

"""
Supabase Auth provides:
- auth.sign_up() - Register new members (metadata stored in user_metadata)
- auth.sign_in_with_password() - Authenticate members
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout

When email confirmation is enabled sign_up() returns no session; the profile
row is missing and the session resolver serves a default member profile.
"""
