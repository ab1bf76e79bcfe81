"""Domain entities and service interfaces."""
