"""
Industries resource: router, schemas, service, repository.
"""
