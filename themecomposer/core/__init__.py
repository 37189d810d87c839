"""Theme model, schemas and editing algorithms."""
