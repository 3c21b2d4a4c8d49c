# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text
- first_name: text (nullable)
- last_name: text (nullable)
- phone: text (nullable)
- dob: date (nullable)
- gender: text (nullable)
- role: text (default: 'MEMBER') - values: MEMBER, MODERATOR, AUTHOR, ADMIN
- avatar_url: text (nullable)
- created_at: timestamp (default: now())
"""
