"""
cadastro: schema-driven validation and soft-delete CRUD for member records.
"""
