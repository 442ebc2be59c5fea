"""Core domain logic: configuration, error codes and the tolerance knowledge base."""
