# Routes package init
"""
Acronym API: API Routes Package
==================================

Route Inventory:
    - acronyms.py:  GET    /acronym                 (list / fuzzy search)
                    POST   /acronym                 (add entry)
                    PATCH  /acronym/{acronymID}     (change one field)
                    DELETE /acronym/{acronymID}     (delete entry)
    - health.py:    GET    /health                  (service health check)

Routes stay thin: pull values out of the request, call AcronymService,
wrap the result in the response envelope.
"""
