# Supabase table: user_bible_progress
# This file documents the expected database schema
# Passage text comes from the public bible-api.com service, not from Supabase

"""
Expected Supabase table structure:

user_bible_progress:
- user_id: uuid (primary key, foreign key to profiles.id)
- book: text (not null)
- chapter: integer (not null)
- last_read_at: timestamp (not null)
"""
