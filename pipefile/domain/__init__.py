"""
Domain Layer.

The File entity, its value objects and the interfaces of its collaborators.
"""
