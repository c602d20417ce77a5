"""Domain layer: the resource record and the store contract the API reads through."""
