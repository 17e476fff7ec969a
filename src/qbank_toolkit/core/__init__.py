"""Core data models, schemas and errors shared by the compiler."""
