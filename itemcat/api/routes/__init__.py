"""Route modules for the ItemCat API."""
