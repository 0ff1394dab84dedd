# Routes package init
"""
Records Service - API Routes Package
=====================================

Route Inventory:
    - records.py:  GET    /records        (list every record)
                   POST   /records        (create a record)
                   GET    /records/{id}   (get one record)
                   PUT    /records/{id}   (replace name and type)
                   DELETE /records/{id}   (delete a record)

Routes stay thin: they parse the id and body, call RecordService and pick the
status code. Statements live in the service.
"""
