"""
Tenistas API — Routes Package
===============================

What:  HTTP route handlers (the controller layer).

Route Inventory:
    - raquetas.py: CRUD under /api/raquetas
    - health.py:   GET /health

Routes are THIN: extract data from the request, call the service, pick the
status code. Business rules live in services and repositories.
"""
