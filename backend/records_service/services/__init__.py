# Services package init
"""
Records Service - Services Layer
=================================

What:  Storage operations sitting between routes (HTTP) and the database.
How:   Services receive the request's session, run their statement, and return
       response schemas or raise application exceptions.

Service Inventory:
    - RecordService: list, get, create, replace and delete records
"""
