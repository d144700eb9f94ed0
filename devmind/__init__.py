"""
DevMind workspace knowledge base backend.

Ingests PDFs, raw text and source repositories into per-workspace vector
partitions and answers questions with chunk-addressable citations.
"""
