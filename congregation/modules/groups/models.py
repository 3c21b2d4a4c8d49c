# Supabase tables: community_groups, group_memberships, group_posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py and membership.py

"""
Expected Supabase table structure:

community_groups:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- image_url: text (nullable)
- members_count: integer (default: 0) - base count, approved memberships are added on read
- created_at: timestamp (default: now())

group_memberships:
- id: uuid (primary key)
- group_id: uuid (foreign key to community_groups.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id, on delete cascade)
- status: text (not null) - values: Pending, Approved
- created_at: timestamp (default: now())
- unique constraint on (group_id, user_id)

There is no Declined status: declining a request deletes the row.

group_posts:
- id: uuid (primary key)
- group_id: uuid (foreign key to community_groups.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id, on delete cascade)
- parent_id: uuid (nullable, foreign key to group_posts.id) - replies
- content: text (not null)
- created_at: timestamp (default: now())
"""
