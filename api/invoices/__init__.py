"""
Invoices resource: router, schemas, service, repository.
"""
