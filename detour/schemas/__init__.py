"""
Detour Pydantic Schemas

Schemas:
- search_schema: Translated search term schemas
"""
