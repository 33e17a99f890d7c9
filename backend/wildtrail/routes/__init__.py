"""
Wildtrail Backend: API Routes Package
=====================================

Route Inventory:
    - admin.py:   /api/admin/<collection>...   (CRUD + reorder)
    - public.py:  GET /api/<collection>         (storefront listings)
    - health.py:  GET /health                   (service health check)

Routes are thin: resolve the collection, call its repository, serialize.
Business rules live in services/.
"""
