# Supabase tables: music_tracks, playlists
# This file documents the expected database schema

"""
Expected Supabase table structure:

music_tracks:
- id: uuid (primary key)
- title: text (not null)
- artist: text (not null)
- url: text (not null) - audio file URL or YouTube link
- duration: text (nullable)
- type: text (not null) - values: MUSIC, PODCAST
- created_at: timestamp (default: now())

playlists:
- id: uuid (primary key)
- title: text (not null)
- user_id: uuid (foreign key to profiles.id)
- tracks: jsonb (default: '[]') - copies of music_tracks rows
- created_at: timestamp (default: now())
"""
