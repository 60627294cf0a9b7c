"""NoteFlow ingestion core: extraction, chunking, analysis, embeddings, vector search."""

__version__ = "0.1.0"
