# Supabase tables: feedback
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

feedback:
- id: uuid (primary key)
- swap_request_id: uuid (not null, references swap_requests.id on delete cascade)
- reviewer_id: uuid (not null, references auth.users.id on delete cascade)
- reviewee_id: uuid (not null, references auth.users.id on delete cascade)
- rating: integer (not null, check 1 <= rating <= 5)
- comment: text (nullable)
- created_at: timestamp (default: now())
- unique constraint on (swap_request_id, reviewer_id)

Row level security:
- select: auth.uid() in (reviewer_id, reviewee_id)
- insert: auth.uid() = reviewer_id
Rows are never updated or deleted by the application.
"""
