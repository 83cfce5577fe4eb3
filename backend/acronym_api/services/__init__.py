# Services package init
"""
Acronym API: Services Layer
==============================

What:  Business logic layer sitting between routes (HTTP) and MongoDB.
Why:   Routes handle HTTP; services handle validation and storage rules.

Service Inventory:
    - AcronymService: list/search with look-ahead pagination, add with
      duplicate detection, single-field update, checked delete
"""
