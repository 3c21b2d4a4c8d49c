# Supabase tables: blog_categories, blog_posts, blog_comments
# This file documents the expected database schema

"""
Expected Supabase table structure:

blog_categories:
- id: uuid (primary key)
- name: text (not null, unique)
- created_at: timestamp (default: now())

blog_posts:
- id: uuid (primary key)
- title: text (not null)
- content: text (not null)
- excerpt: text (nullable)
- author: text (nullable)
- category: text (default: 'General') - category name
- category_id: uuid (nullable, foreign key to blog_categories.id)
- image_url: text (nullable)
- video_url: text (nullable)
- likes: integer (default: 0)
- comments: integer (default: 0)
- created_at: timestamp - publication time; future values are scheduled posts

blog_comments:
- id: uuid (primary key)
- blog_id: uuid (foreign key to blog_posts.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id)
- content: text (not null)
- created_at: timestamp (default: now())
"""
