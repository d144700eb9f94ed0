"""
Boundary layer.

Adapters for the external collaborators: embedding and completion models,
and the vector store.
"""
