# Supabase tables: events, event_rsvps
# This file documents the expected database schema

"""
Expected Supabase table structure:

events:
- id: uuid (primary key)
- title: text (not null)
- date: date (not null)
- time: text (nullable) - display time, e.g. "09:30"
- location: text (nullable)
- description: text (nullable)
- type: text (default: 'EVENT') - values: EVENT, ANNOUNCEMENT
- created_at: timestamp (default: now())

event_rsvps:
- id: uuid (primary key)
- event_id: uuid (foreign key to events.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id, on delete cascade)
- status: text (not null) - values: Yes, No, Maybe
- unique constraint on (event_id, user_id)
"""
