# Supabase table: sermons
# This file documents the expected database schema

"""
Expected Supabase table structure:

sermons:
- id: uuid (primary key)
- title: text (not null)
- preacher: text (not null)
- date_preached: date (not null)
- duration: text (nullable) - display duration, e.g. "45:10"
- video_url: text (not null) - YouTube link or storage URL
- thumbnail_url: text (nullable)
- created_at: timestamp (default: now())
"""
