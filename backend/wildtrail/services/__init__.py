"""
Wildtrail Backend: Services Layer
=================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Routes resolve a repository from the registry and pass it the
       request's session; repositories validate, persist and log.

Service Inventory:
    - CollectionRepository: CRUD + reorder for one ordered collection
    - registry: collection key → CollectionSpec / CollectionRepository
"""
