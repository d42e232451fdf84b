"""Domain layer - transaction identifiers and the services operating on them."""
