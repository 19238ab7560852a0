"""Employee Location Tracker package.

Organized by feature modules (employees, locations, attendance) with a thin
Flask controller layer over service and repository layers. All persistence
goes through a record store (key-value/document style) in ``database``.
"""
