# Supabase tables: swap_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

swap_requests:
- id: uuid (primary key)
- requester_id: uuid (not null, references auth.users.id on delete cascade)
- recipient_id: uuid (not null, references auth.users.id on delete cascade)
- offered_skill_id: uuid (not null, references skills.id) - what the requester teaches
- wanted_skill_id: uuid (not null, references skills.id) - what the requester wants to learn
- message: text (nullable)
- status: text (not null, default: 'pending') - values: pending, accepted, rejected
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now(), stamped by update_swap_requests_updated_at trigger)

Row level security:
- select: auth.uid() in (requester_id, recipient_id)
- insert: auth.uid() = requester_id
- update: auth.uid() in (requester_id, recipient_id)
- delete: auth.uid() = requester_id and status = 'pending'
"""
