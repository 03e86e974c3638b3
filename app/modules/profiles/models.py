# Supabase tables: profiles, storage bucket avatars
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, default gen_random_uuid())
- user_id: uuid (unique, not null, references auth.users.id on delete cascade)
- display_name: text (nullable) - seeded from signup metadata by handle_new_user
- location: text (nullable)
- avatar_url: text (nullable)
- availability: text (nullable)
- is_public: boolean (default: true)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now(), stamped by update_profiles_updated_at trigger)

Row level security:
- select: is_public = true OR auth.uid() = user_id
- insert/update: auth.uid() = user_id

storage bucket "avatars" (public):
- select: anyone
- insert/update: auth.uid() equals the first folder of the object name,
  i.e. objects live at <user_id>/avatar.<ext>
"""
