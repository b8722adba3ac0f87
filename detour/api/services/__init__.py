"""
Detour API Services

Services:
- redirect_service: Rule dispatch and Primo URL building
- advanced_search_service: III advanced search expression decoding
"""
