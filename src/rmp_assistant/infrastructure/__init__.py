"""Provider adapters (OpenAI, Pinecone) and their wiring."""
