"""RateMyProfessor assistant: retrieval-augmented answers about professors."""

__version__ = "0.1.0"
