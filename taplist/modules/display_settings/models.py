# Supabase table: taplist_settings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure (single row):
- id: uuid (primary key)
- title: text (nullable) - falls back to DEFAULT_TITLE when null
- background_image: text (nullable) - public URL in the backgrounds bucket
- font_family: text (nullable) - base font for the whole display
- title_font, title_color: text (nullable)
- beverage_name_font, beverage_name_color: text (nullable)
- brewery_font, brewery_color: text (nullable)
- style_font, style_color: text (nullable)
- abv_font, abv_color: text (nullable)
- description_font, description_color: text (nullable)
- updated_at: timestamp (nullable)

The row is looked up before every write and inserted only when none exists.
"""
