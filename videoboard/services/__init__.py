"""
Use cases sitting between routers and repositories.

Today this is only backend selection; routers call the selected
StorageAdapter directly for CRUD.
"""
