"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks every resource uses (DB handle, settings,
logging, error envelope). Keep resource-specific SQL and business logic in the
resource package (e.g. `companies/`).
"""
