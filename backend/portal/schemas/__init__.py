"""
Pydantic request/response models.

Schemas are separate from the ORM models: responses expose the transformed
shape (decoded lists, localized strings), not raw columns.
"""
