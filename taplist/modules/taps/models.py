# Supabase table: taps
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: integer (primary key) - fixed serving positions 1..TAP_COUNT
- beverage_id: uuid (nullable, foreign key to beverages.id)
- is_active: boolean (default: false)
- updated_at: timestamp (nullable)

Invariant kept by TapService: is_active is true exactly when beverage_id is set.
Rows are seeded by scripts/seed_taplist.py; assignment upserts, so a missing row
is created on first use.
"""
