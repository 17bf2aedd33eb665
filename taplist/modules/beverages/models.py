# Supabase table: beverages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- type: text (not null) - beer | wine | coffee | other
- brewery: text (nullable)
- abv: numeric (nullable) - 0 to 100
- style: text (nullable)
- description: text (nullable)
- label: text (nullable) - public URL of the label image in the labels bucket
- created_at: timestamp (default: now())

Referenced by taps.beverage_id; a beverage is unassigned from its taps before deletion.
"""
