"""
Companies resource: router, schemas, service, repository.
"""
