"""Blog content API: users, categories, subcategories and posts."""
