"""
docsearch: document retrieval service.

Chunks uploaded documents, embeds them in resilient batches and ranks
verbatim extracts against natural-language queries.
"""

__version__ = "0.1.0"
