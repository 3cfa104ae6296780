"""FastAPI surface over the word store."""
