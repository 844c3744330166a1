"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive the shared Database at construction, turn raw rows into
domain model objects, and raise EntityNotFoundError when an update or delete
touches no row.
"""
