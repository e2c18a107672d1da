"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates the SQL for one table and receives the shared
Database handle. Repositories return domain model objects and let database
errors propagate; the service layer decides what a failure means.
"""
