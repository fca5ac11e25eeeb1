"""
db/ - Database Layer
====================
Handles PostgreSQL connection pooling and transaction scoping.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
