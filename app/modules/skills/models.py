# Supabase tables: skills, user_skills
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

skills:
- id: uuid (primary key)
- name: text (unique, not null) - case-sensitive as stored
- category: text (nullable)
- is_approved: boolean (default: true)
- created_at: timestamp (default: now())

user_skills:
- id: uuid (primary key)
- user_id: uuid (not null, references auth.users.id on delete cascade)
- skill_id: uuid (not null, references skills.id on delete cascade)
- skill_type: text (not null) - values: offered, wanted
- created_at: timestamp (default: now())
- unique constraint on (user_id, skill_id, skill_type)

Row level security:
- skills: select for everyone, insert for any authenticated user
- user_skills: select for everyone, all mutations only where auth.uid() = user_id
"""
